"""
Prompts
=======

Analysis, translation and trend-summary prompts. Answers are written in
TARGET_LANGUAGE; the analysis is markdown that the block parser turns into
Notion content.
"""

from typing import List

from ..models import ProductListing

TARGET_LANGUAGE = "Korean"


def get_analysis_prompt(product: ProductListing, website_content: str = "") -> str:
    """Product teardown prompt for a frontend developer looking for ideas to benchmark"""
    feed_context = f"\n\n[First feed post]\n{product.first_feed_post}" if product.first_feed_post else ""
    website_context = f"\n\n[Product website]\n{website_content}" if website_content else ""

    return f"""
You are a senior frontend engineer and product lead (CPO).
Here is a product listed on Indie Hackers:

Name: {product.name}
Description: {product.description}
Monthly revenue: ${product.revenue_raw}/month{feed_context}{website_context}

Using everything above, analyze the product in detail under these headings:

## 1️⃣ Core value proposition
   - What core problem does it solve?
   - Who is the target customer?
   - What is its distinctive positioning?

## 2️⃣ Benchmark value for a frontend developer with two years of experience
   - Worth benchmarking: ✅/❌
   - If ✅, the concrete reasons (learning points, technical challenges, business model)
   - If ❌, why it is not worth benchmarking

## 3️⃣ Likely tech stack and architecture
   - Frontend stack (Next.js, React, Vue, ...)
   - Backend / infrastructure (Supabase, AWS, Vercel, ...)
   - Database and storage
   - Payments (Stripe, Paddle, ...)
   - Key libraries and tools

## 4️⃣ Build time and difficulty
   - Estimated time to build something similar (in weeks)
   - Technical difficulty (beginner / intermediate / advanced)
   - Time split across prototype, MVP and finished version
   - Expected obstacles and how to get past them

## 5️⃣ Business model
   - Revenue model (subscription, one-off, freemium, ...)
   - Likely pricing
   - Marketing strategy hints

Start every section with its `##` heading exactly as written above and write
each point as a `-` bullet. Give concrete, practical detail.
Write the answer in {TARGET_LANGUAGE}, detailed enough for a developer to act on.
"""


def get_translation_prompt(product: ProductListing) -> str:
    """Description translation prompt"""
    return f"""
Translate this English product description into natural {TARGET_LANGUAGE}:

{product.description}

Guidelines:
- Translate technical terms where sensible, keep well-known English terms as they are
- Make it read naturally
- Preserve the product's meaning exactly
- Reply with the translation only
"""


def get_trend_prompt(products: List[ProductListing]) -> str:
    """Trend summary prompt over the scraped product list"""
    product_list = "\n".join(
        f"{i}. {p.name} - {p.description} (MRR: ${p.revenue_raw}, "
        f"Stripe verified: {'✅' if p.is_verified else '❌'})"
        for i, p in enumerate(products, start=1)
    )

    return f"""
These are the latest SaaS products collected from Indie Hackers:

{product_list}

Write a trend summary in this format:

## 💡 SaaS trends on today's page

### Observations by category

Cover these categories:
- AI productivity tools
- Single-purpose utility SaaS
- Unverified revenue
- Community-driven marketing
- AI editing / automation

For each category give:
- **Observation**: the concrete pattern or trait
- **Idea for a frontend developer**: something worth benchmarking

Then add a table:

Category | Observation | Idea
--- | --- | ---
AI productivity tools | [observation] | ✨ [idea]
Single-purpose utility SaaS | [observation] | 🔧 [idea]
Unverified revenue | [observation] | 💰 [idea]
Community-driven marketing | [observation] | 📢 [idea]
AI editing / automation | [observation] | 🪄 [idea]

Write in {TARGET_LANGUAGE} with concrete, practical insight.
"""

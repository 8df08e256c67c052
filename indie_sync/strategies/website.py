"""
Product website summary.

Pulls the headline, hero copy, feature list, description and pricing text
from a product's own landing page, as extra context for the analysis prompt.
"""

from typing import List

from .base import Document, text_of

TITLE_SELECTOR = "h1, [class*='hero'] h1, [class*='headline']"

HERO_SELECTORS = [
    "[class*='hero'] p",
    "[class*='hero'] [class*='description']",
    "[class*='hero'] [class*='subtitle']",
    "section[class*='hero'] p",
    "main > section:first-child p",
]

FEATURE_SELECTORS = [
    "[class*='feature']",
    "[class*='benefit']",
    "[class*='advantage']",
    "li[class*='feature']",
    "[class*='features'] li",
]
MAX_FEATURES = 6

DESCRIPTION_SELECTORS = [
    "[class*='description']",
    "[class*='about']",
    "[class*='intro']",
    "main p",
    "section p",
]

PRICING_SELECTORS = [
    "[class*='pricing']",
    "[class*='price']",
    "[class*='plan']",
    "[class*='subscription']",
]


def _first_text(doc: Document, selectors: List[str], min_len: int, max_len: int) -> str:
    # Only the first element per selector is considered
    for selector in selectors:
        el = doc.soup.select_one(selector)
        if el is None:
            continue
        text = text_of(el)
        if min_len < len(text) < max_len:
            return text
    return ""


def _features(doc: Document) -> List[str]:
    for selector in FEATURE_SELECTORS:
        elements = doc.soup.select(selector)
        if elements:
            texts = [text_of(el) for el in elements[:MAX_FEATURES]]
            return [t for t in texts if 10 < len(t) < 200]
    return []


def _pricing(doc: Document) -> str:
    for selector in PRICING_SELECTORS:
        el = doc.soup.select_one(selector)
        if el is not None:
            return ' '.join(text_of(el).split())
    return ""


def extract_website_content(doc: Document) -> str:
    """Labelled summary lines, or empty if nothing was found."""
    title = text_of(doc.soup.select_one(TITLE_SELECTOR))
    hero = _first_text(doc, HERO_SELECTORS, 20, 500)
    description = _first_text(doc, DESCRIPTION_SELECTORS, 50, 1000)
    features = _features(doc)
    pricing = _pricing(doc)

    parts = []
    if title:
        parts.append(f"Title: {title}")
    if hero:
        parts.append(f"Hero: {hero}")
    if description:
        parts.append(f"Description: {description}")
    if features:
        parts.append(f"Features: {', '.join(features)}")
    if pricing:
        parts.append(f"Pricing: {pricing}")
    return '\n'.join(parts)

"""
Daily report: build board, product table and an LLM trend summary, as
markdown. Stored in Notion through ReportStore, or printed when no report
destination is configured.
"""

from datetime import date
from typing import List, Optional

from .errors import LLMError
from .llm import Analyst
from .logger import get_logger
from .models import ProductListing
from .notion import ReportStore
from .scraper import IndieHackersScraper

log = get_logger('report')

BOARD_SIZE = 5
TABLE_SIZE = 20
TREND_FALLBACK = "Trend summary could not be generated."


def format_revenue(product: ProductListing) -> str:
    return f"${product.revenue:,.0f}"


def verification_label(product: ProductListing) -> str:
    return "✅ Stripe Verified" if product.is_verified else "Self-reported"


def shorten(text: str, limit: int) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def cell(text: str) -> str:
    """Table cell text on one line, with pipes escaped."""
    return ' '.join((text or '').split()).replace('|', '\\|')


def build_board_section(products: List[ProductListing]) -> str:
    """Top products with revenue or a verified badge. Empty if none qualify."""
    top = [p for p in products if p.revenue > 0 or p.is_verified][:BOARD_SIZE]
    if not top:
        return ""

    lines = [
        "## 🧩 1. The Build Board",
        "",
        "| Rank | Product | Description | MRR | Verified |",
        "|------|---------|-------------|-----|----------|",
    ]
    for rank, product in enumerate(top, start=1):
        lines.append(
            f"| {rank} | {cell(product.name)} | {shorten(cell(product.description), 50)} "
            f"| {format_revenue(product)} | {verification_label(product)} |"
        )
    return "\n".join(lines) + "\n"


def products_section(products: List[ProductListing]) -> str:
    lines = [
        "## 📦 2. Products Database",
        "",
        "Most MRR figures are self-reported.",
        "",
        "| Product | Summary | MRR | Verified |",
        "|---------|---------|-----|----------|",
    ]
    for product in products[:TABLE_SIZE]:
        lines.append(
            f"| {cell(product.name)} | {shorten(cell(product.description), 40)} "
            f"| {format_revenue(product)} | {verification_label(product)} |"
        )
    return "\n".join(lines) + "\n"


def build_report(products: List[ProductListing], trend_summary: str, today: Optional[date] = None) -> str:
    """Full report markdown."""
    today = today or date.today()
    parts = [
        "# Indie Hackers daily report",
        "",
        f"**Generated**: {today.isoformat()}",
        "",
        "---",
        "",
    ]
    board = build_board_section(products)
    if board:
        parts += [board, "---", ""]
    parts += [products_section(products), "---", "", trend_summary]
    return "\n".join(parts)


def report_title(today: Optional[date] = None) -> str:
    return f"Indie Hackers report - {(today or date.today()).isoformat()}"


async def generate_report(
    scraper: IndieHackersScraper,
    analyst: Analyst,
    store: Optional[ReportStore] = None,
    today: Optional[date] = None,
) -> str:
    """
    Scrape, build and store the report. Returns the markdown.

    Without a configured store the markdown is printed instead.
    """
    products = await scraper.scrape()
    log.info(f"Building report from {len(products)} products")

    try:
        trend = await analyst.trend_summary(products)
    except LLMError as e:
        log.error(f"Trend summary failed: {e}")
        trend = TREND_FALLBACK

    markdown = build_report(products, trend, today)

    if store is not None and store.configured:
        await store.save(report_title(today), markdown)
    else:
        log.warning("NOTION_REPORT_DB_ID / NOTION_REPORT_PAGE_ID not set, printing report")
        print(markdown)
    return markdown

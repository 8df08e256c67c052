"""
Sync pipeline.

    existing URLs -> scrape (cap, dedup, enrich) -> per item: analyze || translate -> create page

Each item runs as its own task; failures are captured as ItemResults and
only counted at the end.
"""

import asyncio
from typing import Dict, List, Optional

from .llm import Analyst
from .logger import get_logger
from .models import ItemResult, ProductListing, SyncSummary
from .notion import ProductStore
from .scraper import IndieHackersScraper

log = get_logger('pipeline')


def collect_results(products: List[ProductListing], outcomes: list) -> List[ItemResult]:
    """Turn all-settled gather output into ItemResults, logging failures."""
    results = []
    for product, outcome in zip(products, outcomes):
        if isinstance(outcome, ItemResult):
            results.append(outcome)
        elif isinstance(outcome, BaseException):
            log.error(f"{product.name}: {outcome}")
            results.append(ItemResult.failure(product.name, outcome))
        else:
            results.append(ItemResult.success(product.name))
    return results


def log_summary(summary: SyncSummary, label: str = "Sync"):
    log.info("=" * 60)
    log.info(f"{label} complete: {summary.succeeded} succeeded, {summary.failed} failed"
             + (f", {summary.skipped} skipped" if summary.skipped else ""))
    for result in summary.results:
        if result.status == "error":
            log.info(f"  ✗ {result.name}: {result.error}")


class SyncPipeline:
    """
    Usage:
        pipeline = SyncPipeline(scraper, analyst, store)
        summary = await pipeline.sync()
    """

    def __init__(self, scraper: IndieHackersScraper, analyst: Analyst, store: ProductStore):
        self.scraper = scraper
        self.analyst = analyst
        self.store = store

    async def _analyze_and_save(self, product: ProductListing, website_content: str = "") -> ItemResult:
        analysis, description = await asyncio.gather(
            self.analyst.analyze(product, website_content),
            self.analyst.translate(product),
        )
        await self.store.save(product, analysis, description)
        log.info(f"✓ {product.name} saved")
        return ItemResult.success(product.name)

    async def _process_new(self, product: ProductListing) -> ItemResult:
        website_content = ""
        if product.website_url:
            website_content = await self.scraper.website_content(product.website_url)
        return await self._analyze_and_save(product, website_content)

    async def _process_existing(self, product: ProductListing, page_id: Optional[str]) -> ItemResult:
        if not page_id:
            return ItemResult.skipped(product.name, "no page id")
        await self.store.update_verification(page_id, product.is_verified)
        log.info(f"✓ {product.name}: Verified Stripe = {product.is_verified}")
        return ItemResult.success(product.name)

    async def sync(self) -> SyncSummary:
        """
        Add every product not yet in the database.

        Raises:
            StoreError: the existing pages could not be read
            PageLoadError / NoProductsError: nothing could be scraped
        """
        existing = await self.store.existing_urls()
        products = await self.scraper.scrape(skip_links=existing)

        if not products:
            log.info("No new products to add")
            return SyncSummary()

        log.info(f"Processing {len(products)} new products...")
        outcomes = await asyncio.gather(
            *(self._analyze_and_save(p) for p in products),
            return_exceptions=True,
        )
        summary = SyncSummary(collect_results(products, outcomes))
        log_summary(summary)

        if summary.succeeded > 0:
            await self.store.record_run(summary.succeeded)
        return summary

    async def latest(self, count: int = 20) -> SyncSummary:
        """
        Sync the newest `count` products into the verification database.

        Products already present get their Verified Stripe checkbox refreshed;
        new ones are analyzed with their website as extra context.
        """
        try:
            existing: Dict[str, str] = await self.store.existing_pages()
        except Exception as e:
            log.warning(f"Could not read existing pages, treating database as empty: {e}")
            existing = {}

        products = await self.scraper.scrape_latest(count)
        known = [p for p in products if p.link in existing]
        new = [p for p in products if p.link not in existing]
        log.info(f"{len(known)} existing, {len(new)} new")

        results = []
        if known:
            outcomes = await asyncio.gather(
                *(self._process_existing(p, existing.get(p.link)) for p in known),
                return_exceptions=True,
            )
            results.extend(collect_results(known, outcomes))

        if new:
            outcomes = await asyncio.gather(
                *(self._process_new(p) for p in new),
                return_exceptions=True,
            )
            results.extend(collect_results(new, outcomes))

        summary = SyncSummary(results)
        log_summary(summary, label="Latest sync")
        return summary

"""
Indie Hackers scraper.

listing page -> capped listing entries -> concurrent detail enrichment.
"""

import asyncio
from typing import Iterable, List, Optional

from . import config
from .errors import NoProductsError
from .logger import get_logger
from .models import ProductListing
from .page_loader import PageLoader
from .strategies import Document, extract_listings, extract_details, extract_website_content

log = get_logger('scraper')


def synthesize_thumbnail(listing: ProductListing) -> str:
    """Avatar URL derived from the product slug, or empty without a slug."""
    slug = listing.slug
    if not slug:
        return ""
    return config.THUMBNAIL_TEMPLATE.format(slug=slug)


class IndieHackersScraper:
    """
    Usage:
        async with PageLoader() as loader:
            scraper = IndieHackersScraper(loader)
            products = await scraper.scrape()
    """

    def __init__(self, loader: PageLoader, detail_cap: int = config.DETAIL_CAP):
        self.loader = loader
        self.detail_cap = detail_cap

    async def scrape_listing(self) -> List[ProductListing]:
        """Listing-page entries only, uncapped."""
        page_data = await self.loader.load_listing(config.SOURCE_URL)
        listings = extract_listings(Document.from_page(page_data))
        verified = sum(1 for p in listings if p.is_verified)
        log.info(f"Found {len(listings)} products on the listing page ({verified} verified)")
        return listings

    async def scrape(self, skip_links: Optional[Iterable[str]] = None) -> List[ProductListing]:
        """
        Scrape and enrich products.

        Only the first `detail_cap` entries are kept. Entries whose link is in
        `skip_links` are dropped before any detail page is visited.

        Raises:
            PageLoadError: the listing page could not be loaded
            NoProductsError: the listing page had no product entries
        """
        listings = await self.scrape_listing()
        if not listings:
            raise NoProductsError(f"No products found on {config.SOURCE_URL}")

        if len(listings) > self.detail_cap:
            log.info(f"Keeping first {self.detail_cap} of {len(listings)} products")
            listings = listings[:self.detail_cap]

        if skip_links:
            known = set(skip_links)
            before = len(listings)
            listings = [p for p in listings if p.link not in known]
            if before != len(listings):
                log.info(f"Skipping {before - len(listings)} products already in Notion")

        return await self.enrich_all(listings)

    async def scrape_latest(self, max_count: int = 20) -> List[ProductListing]:
        products = await self.scrape()
        log.info(f"Taking {min(max_count, len(products))} of {len(products)} latest products")
        return products[:max_count]

    async def enrich_all(self, listings: List[ProductListing]) -> List[ProductListing]:
        """Visit every detail page concurrently. One failure never cancels the rest."""
        log.info(f"Collecting details for {len(listings)} products...")
        results = await asyncio.gather(
            *(self.enrich(listing) for listing in listings),
            return_exceptions=True,
        )
        enriched = []
        for listing, result in zip(listings, results):
            if isinstance(result, BaseException):
                log.warning(f"{listing.name}: detail enrichment crashed: {result}")
                enriched.append(listing)
            else:
                enriched.append(result)
        return enriched

    async def enrich(self, listing: ProductListing) -> ProductListing:
        """
        Fill detail fields in place.

        On failure the listing keeps its listing-page values.
        """
        try:
            page_data = await self.loader.load_detail(listing.link)
            details = extract_details(Document.from_page(page_data))
            listing.apply_details(details)
            if not listing.thumbnail_url:
                listing.thumbnail_url = synthesize_thumbnail(listing)
        except Exception as e:
            log.warning(f"{listing.name}: could not collect details: {e}")
        return listing

    async def website_content(self, url: str) -> str:
        """Summary of a product's own website, empty on failure."""
        page_data = await self.loader.load_website(url)
        if page_data is None:
            return ""
        try:
            return extract_website_content(Document.from_page(page_data))
        except Exception as e:
            log.warning(f"Website extraction failed for {url}: {e}")
            return ""

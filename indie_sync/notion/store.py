"""
Product and report persistence on top of NotionClient.
"""

from datetime import date
from typing import Dict, List, Optional, Set

from ..blocks import parse_blocks
from ..logger import get_logger
from ..models import ProductListing, ProductProperties
from .client import NotionClient
from .serializer import blocks_to_notion, paragraph, properties_to_notion, title_property

log = get_logger('store')

URL_PROPERTY = "URL"
VERIFIED_PROPERTY = "Verified Stripe"


def page_url(page: dict) -> Optional[str]:
    """Value of a page's URL property, or None."""
    prop = (page.get("properties") or {}).get(URL_PROPERTY)
    if not prop or prop.get("type", "url") != "url":
        return None
    url = prop.get("url")
    return url if isinstance(url, str) and url else None


def analysis_children(analysis: str) -> List[dict]:
    """Analysis markdown as Notion blocks, or one raw paragraph if nothing parsed."""
    children = blocks_to_notion(parse_blocks(analysis))
    return children or [paragraph(analysis)]


class ProductStore:
    """
    One Notion products database.

    `with_verification` selects the schema variant with a "Verified Stripe"
    checkbox.
    """

    def __init__(self, client: NotionClient, database_id: str, with_verification: bool = False):
        self.client = client
        self.database_id = database_id
        self.with_verification = with_verification

    async def existing_pages(self) -> Dict[str, str]:
        """URL -> page id for every page already in the database."""
        pages = await self.client.query_all_pages(self.database_id)
        existing = {}
        for page in pages:
            url = page_url(page)
            if url:
                existing[url] = page["id"]
        log.info(f"{len(existing)} products already in Notion")
        return existing

    async def existing_urls(self) -> Set[str]:
        return set(await self.existing_pages())

    async def save(self, listing: ProductListing, analysis: str, description: str) -> dict:
        """Create the product page with its analysis in one call."""
        props = ProductProperties.from_listing(listing, description, self.with_verification)
        return await self.client.create_page(
            parent={"database_id": self.database_id},
            properties=properties_to_notion(props),
            children=analysis_children(analysis),
        )

    async def update_verification(self, page_id: str, verified: bool) -> dict:
        return await self.client.update_page_property(page_id, VERIFIED_PROPERTY, {"checkbox": verified})

    async def record_run(self, new_count: int, today: Optional[date] = None) -> Optional[str]:
        """Write the run summary into the database description. Failures are logged only."""
        today = today or date.today()
        text = f"Updated: {today.isoformat()}, {new_count} new entries"
        try:
            await self.client.update_database_description(self.database_id, text)
        except Exception as e:
            log.error(f"Database description update failed: {e}")
            return None
        log.info(f"Database description updated: {text}")
        return text


class ReportStore:
    """Where the daily report goes: a database (new page) or a fixed page (replaced)."""

    def __init__(self, client: NotionClient, database_id: Optional[str] = None, page_id: Optional[str] = None):
        self.client = client
        self.database_id = database_id
        self.page_id = page_id

    @property
    def configured(self) -> bool:
        return bool(self.database_id or self.page_id)

    async def save(self, title: str, markdown: str) -> str:
        """Store the report and return the id of the page written."""
        children = blocks_to_notion(parse_blocks(markdown))

        if self.database_id:
            page = await self.client.create_page(
                parent={"database_id": self.database_id},
                properties={"Name": title_property(title)},
                children=children,
            )
            log.info(f"Report saved to database {self.database_id}")
            return page.get("id", "")

        if self.page_id:
            await self._clear_page()
            await self.client.append_children(self.page_id, children)
            log.info(f"Report written to page {self.page_id}")
            return self.page_id

        raise ValueError("No report database or page configured")

    async def _clear_page(self):
        try:
            existing = await self.client.list_children(self.page_id)
        except Exception as e:
            log.warning(f"Could not list existing report blocks: {e}")
            return
        for block in existing:
            try:
                await self.client.delete_block(block["id"])
            except Exception as e:
                log.warning(f"Could not delete block {block.get('id')}: {e}")

"""
Low-level Notion REST client (async).
"""

from typing import Any, Dict, List, Optional

import aiohttp

from ..errors import StoreError
from ..logger import get_logger

log = get_logger('notion')

# Notion caps page_size and children per request at 100
PAGE_SIZE = 100
CHILDREN_BATCH = 100


class NotionClient:
    """
    Usage:
        async with NotionClient(api_key) as notion:
            pages = await notion.query_all_pages(database_id)
    """

    API_URL = "https://api.notion.com/v1"
    NOTION_VERSION = "2022-06-28"

    def __init__(self, api_key: str, session: Optional[aiohttp.ClientSession] = None, timeout: int = 60):
        self.api_key = api_key
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self):
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    def _get_headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Notion-Version": self.NOTION_VERSION,
            "Content-Type": "application/json",
        }

    async def _request(self, method: str, path: str, payload: Optional[dict] = None) -> Dict[str, Any]:
        url = f"{self.API_URL}/{path.lstrip('/')}"
        try:
            async with self._session.request(
                method,
                url,
                json=payload,
                headers=self._get_headers(),
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                data = await response.json(content_type=None)
                if response.status >= 400:
                    message = data.get("message") if isinstance(data, dict) else str(data)
                    raise StoreError(f"Notion API error: {message}", status=response.status, body=data)
                return data or {}
        except aiohttp.ClientError as e:
            raise StoreError(f"Notion request failed: {e}") from e

    # =========================================================================
    # DATABASES
    # =========================================================================

    async def query_all_pages(self, database_id: str, query_filter: Optional[dict] = None) -> List[dict]:
        """All pages of a database, following next_cursor until has_more is false."""
        pages = []
        cursor = None
        while True:
            payload: Dict[str, Any] = {"page_size": PAGE_SIZE}
            if cursor:
                payload["start_cursor"] = cursor
            if query_filter:
                payload["filter"] = query_filter
            data = await self._request("POST", f"databases/{database_id}/query", payload)
            pages.extend(data.get("results", []))
            cursor = data.get("next_cursor")
            if not data.get("has_more") or not cursor:
                break
        return pages

    async def update_database_description(self, database_id: str, text: str) -> dict:
        return await self._request("PATCH", f"databases/{database_id}", {
            "description": [{"type": "text", "text": {"content": text}}],
        })

    # =========================================================================
    # PAGES
    # =========================================================================

    async def create_page(self, parent: dict, properties: dict, children: List[dict]) -> dict:
        """
        Create a page with its content.

        Notion accepts at most 100 children per call; the rest are appended.
        """
        page = await self._request("POST", "pages", {
            "parent": parent,
            "properties": properties,
            "children": children[:CHILDREN_BATCH],
        })
        if len(children) > CHILDREN_BATCH:
            await self.append_children(page["id"], children[CHILDREN_BATCH:])
        return page

    async def update_page_properties(self, page_id: str, properties: dict) -> dict:
        return await self._request("PATCH", f"pages/{page_id}", {"properties": properties})

    async def update_page_property(self, page_id: str, name: str, value: dict) -> dict:
        return await self.update_page_properties(page_id, {name: value})

    # =========================================================================
    # BLOCKS
    # =========================================================================

    async def list_children(self, block_id: str) -> List[dict]:
        children = []
        cursor = None
        while True:
            path = f"blocks/{block_id}/children?page_size={PAGE_SIZE}"
            if cursor:
                path += f"&start_cursor={cursor}"
            data = await self._request("GET", path)
            children.extend(data.get("results", []))
            cursor = data.get("next_cursor")
            if not data.get("has_more") or not cursor:
                break
        return children

    async def append_children(self, block_id: str, children: List[dict]):
        for start in range(0, len(children), CHILDREN_BATCH):
            batch = children[start:start + CHILDREN_BATCH]
            await self._request("PATCH", f"blocks/{block_id}/children", {"children": batch})
            log.debug(f"Appended blocks {start + 1}-{start + len(batch)}/{len(children)}")

    async def delete_block(self, block_id: str) -> dict:
        return await self._request("DELETE", f"blocks/{block_id}")

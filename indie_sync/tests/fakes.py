"""
Fake browser objects and collaborators shared by the async tests.
"""

import asyncio

from indie_sync.models import PageData
from indie_sync.page_loader import ANNOTATE_LAYOUT_JS, COUNT_PRODUCT_LINKS_JS, SCROLL_TO_BOTTOM_JS


class FakePage:
    """
    Stands in for a Playwright page.

    `goto_errors` is consumed one per goto() call; `link_counts` one per
    product-link count.
    """

    def __init__(self, html="<html><body></body></html>", goto_errors=None, link_counts=None):
        self.url = "about:blank"
        self.html = html
        self.goto_errors = list(goto_errors or [])
        self.link_counts = list(link_counts or [1])
        self.gotos = []
        self.waits = []
        self.scripts = []
        self.closed = False

    async def goto(self, url, wait_until=None, timeout=None):
        self.gotos.append((url, wait_until, timeout))
        if self.goto_errors:
            error = self.goto_errors.pop(0)
            if error is not None:
                raise error
        self.url = url

    async def wait_for_timeout(self, ms):
        self.waits.append(ms)

    async def title(self):
        return "Products"

    async def evaluate(self, script):
        self.scripts.append(script)
        if script == COUNT_PRODUCT_LINKS_JS:
            return self.link_counts.pop(0) if len(self.link_counts) > 1 else self.link_counts[0]
        if script in (ANNOTATE_LAYOUT_JS, SCROLL_TO_BOTTOM_JS):
            return None
        raise AssertionError(f"unexpected script: {script[:40]}")

    async def content(self):
        return self.html

    async def close(self):
        self.closed = True


class FakeBrowser:
    """Hands out prepared FakePages in order."""

    def __init__(self, *pages):
        self.pages = list(pages)
        self.opened = []

    async def new_page(self):
        page = self.pages.pop(0) if self.pages else FakePage()
        self.opened.append(page)
        return page

    async def close(self):
        pass


class OverlapTracker:
    """
    Counts calls in flight.

    Each call waits until `expected` calls have started, so calls issued one
    after another never overlap and `max_in_flight` stays at 1. The wait is
    bounded by `timeout` so a sequential caller finishes instead of hanging.
    """

    def __init__(self, expected, timeout=1.0):
        self.expected = expected
        self.timeout = timeout
        self.started = 0
        self.in_flight = 0
        self.max_in_flight = 0
        self.all_started = asyncio.Event()

    async def __aenter__(self):
        self.started += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        if self.started >= self.expected:
            self.all_started.set()
        try:
            await asyncio.wait_for(self.all_started.wait(), self.timeout)
        except asyncio.TimeoutError:
            pass
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.in_flight -= 1
        return False


class FakeLoader:
    """
    PageLoader stand-in for scraper tests.

    `details` maps a detail URL to PageData or an exception to raise.
    """

    def __init__(self, listing_html, details=None, websites=None, tracker=None):
        self.listing_html = listing_html
        self.tracker = tracker
        self.details = details or {}
        self.websites = websites or {}
        self.detail_urls = []

    async def load_listing(self, url):
        return PageData(url="https://www.indiehackers.com/products", html=self.listing_html)

    async def load_detail(self, url):
        self.detail_urls.append(url)
        if self.tracker is not None:
            async with self.tracker:
                pass
        result = self.details.get(url, PageData(url=url, html=""))
        if isinstance(result, Exception):
            raise result
        return result

    async def load_website(self, url):
        return self.websites.get(url)


class FakeLLM:
    """LLMInterface stand-in. Replies by prompt type; fails for prompts containing `fail_on`."""

    def __init__(self, fail_on=None, empty=False, tracker=None):
        self.fail_on = fail_on
        self.tracker = tracker
        self.empty = empty
        self.prompts = []

    async def complete(self, prompt, temperature=0.0, max_tokens=4000):
        from indie_sync.errors import LLMError

        self.prompts.append((prompt, temperature))
        if self.tracker is not None:
            async with self.tracker:
                pass
        if self.fail_on and self.fail_on in prompt:
            raise LLMError(f"failed on {self.fail_on}")
        if self.empty:
            return ""
        if "Translate" in prompt:
            return "번역된 설명"
        if "trend summary" in prompt:
            return "## Trends\n- AI everywhere"
        return "# Analysis\n- Solid product"


class FakeStore:
    """ProductStore stand-in."""

    def __init__(self, existing=None, fail_on=None, existing_error=None):
        self.existing = dict(existing or {})
        self.fail_on = fail_on
        self.existing_error = existing_error
        self.saved = []
        self.verifications = []
        self.runs = []

    async def existing_pages(self):
        if self.existing_error:
            raise self.existing_error
        return dict(self.existing)

    async def existing_urls(self):
        return set(await self.existing_pages())

    async def save(self, listing, analysis, description):
        from indie_sync.errors import StoreError

        if self.fail_on and listing.name == self.fail_on:
            raise StoreError("rejected", status=400)
        self.saved.append((listing, analysis, description))
        return {"id": f"page-{len(self.saved)}"}

    async def update_verification(self, page_id, verified):
        self.verifications.append((page_id, verified))
        return {}

    async def record_run(self, new_count, today=None):
        self.runs.append(new_count)
        return f"Updated: {new_count}"


def listing_html(count, verified_slugs=()):
    """A listing snapshot with `count` product cards."""
    cards = []
    for i in range(count):
        slug = f"p{i}"
        badge = (
            '<div class="product-card__revenue-explanation">Verified revenue</div>'
            if slug in verified_slugs else ""
        )
        cards.append(
            '<div>' * 6 +
            f'<div class="card">{badge}<a href="/product/{slug}">'
            f'<div><strong>Product {i}</strong><div><span>Description {i}</span></div></div>'
            f'<span>${(i + 1) * 100}</span></a></div>' +
            '</div>' * 6
        )
    return f"<html><body>{''.join(cards)}</body></html>"

"""
Page loader using Playwright with stealth mode.

Owns navigation against the challenge-protected source site:
    - listing page: long "network idle" navigation, staged settle waits,
      one full retry, one scroll when no products rendered yet
    - detail pages: one short navigation each, no retry
    - product websites: best-effort, empty on failure

Every load ends with a snapshot: bounding boxes, resolved hrefs and
currentSrc are written onto the DOM as data-* attributes, then the HTML is
captured. Extraction works on that snapshot only.

Pages are closed on every exit path.
"""

from typing import Optional

from playwright.async_api import Page

from . import config
from .errors import PageLoadError
from .logger import get_logger
from .models import PageData
from .stealth import StealthBrowser

log = get_logger('page_loader')


ANNOTATE_LAYOUT_JS = """
() => {
    const mark = (el) => {
        const rect = el.getBoundingClientRect();
        el.setAttribute('data-box-top', String(rect.top));
        el.setAttribute('data-box-left', String(rect.left));
    };
    document.querySelectorAll('a').forEach(a => {
        mark(a);
        if (a.href) a.setAttribute('data-resolved-href', a.href);
    });
    document.querySelectorAll('[class*="revenue-explanation"]').forEach(mark);
    document.querySelectorAll('img').forEach(img => {
        if (img.src) img.setAttribute('data-resolved-src', img.src);
        if (img.currentSrc) img.setAttribute('data-current-src', img.currentSrc);
    });
}
"""

COUNT_PRODUCT_LINKS_JS = """
() => Array.from(document.querySelectorAll('a'))
    .filter(a => a.href && a.href.includes('/product/'))
    .length
"""

SCROLL_TO_BOTTOM_JS = "() => window.scrollTo(0, document.body.scrollHeight)"


async def snapshot(page: Page) -> PageData:
    """Annotate layout onto the DOM and capture the HTML."""
    await page.evaluate(ANNOTATE_LAYOUT_JS)
    html = await page.content()
    return PageData(url=page.url, html=html)


class PageLoader:
    """
    Navigation controller over one stealth browser session.

    Usage:
        async with PageLoader(headless=False) as loader:
            listing = await loader.load_listing()
            detail = await loader.load_detail(url)
    """

    def __init__(self, headless: bool = False, browser: Optional[StealthBrowser] = None):
        self.headless = headless
        self._browser = browser
        self._owns_browser = browser is None

    async def __aenter__(self):
        if self._browser is None:
            self._browser = StealthBrowser(headless=self.headless)
            await self._browser.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._owns_browser and self._browser is not None:
            await self._browser.close()
            self._browser = None

    async def _new_page(self) -> Page:
        return await self._browser.new_page()

    # =========================================================================
    # LISTING
    # =========================================================================

    async def _navigate_listing(self, page: Page, url: str):
        await page.goto(url, wait_until='networkidle', timeout=config.LISTING_NAV_TIMEOUT)
        log.info(f"Waiting {config.CHALLENGE_SETTLE // 1000}s for the bot check to clear...")
        await page.wait_for_timeout(config.CHALLENGE_SETTLE)
        await page.wait_for_timeout(config.RENDER_SETTLE)

    async def _goto_with_retry(self, page: Page, url: str):
        try:
            await self._navigate_listing(page, url)
        except Exception as e:
            log.warning(f"First load of {url} failed ({e}), retrying...")
            await page.wait_for_timeout(config.RETRY_WAIT)
            try:
                await self._navigate_listing(page, url)
            except Exception as retry_error:
                raise PageLoadError(url, retry_error) from retry_error

    async def load_listing(self, url: str = config.SOURCE_URL) -> PageData:
        """
        Load the product listing page.

        Raises:
            PageLoadError: both navigation attempts failed
        """
        log.info(f"Loading listing page {url}")
        page = await self._new_page()
        try:
            await self._goto_with_retry(page, url)

            title = await page.title()
            count = await page.evaluate(COUNT_PRODUCT_LINKS_JS)
            log.info(f"Page '{title}': {count} product links")

            if count == 0:
                # Lazily rendered lists fill in on scroll
                log.warning("No product links yet, scrolling to load more content...")
                await page.evaluate(SCROLL_TO_BOTTOM_JS)
                await page.wait_for_timeout(config.SCROLL_WAIT)
                count = await page.evaluate(COUNT_PRODUCT_LINKS_JS)
                log.info(f"After scroll: {count} product links")

            return await snapshot(page)
        finally:
            await page.close()

    # =========================================================================
    # DETAIL PAGES
    # =========================================================================

    async def load_detail(self, url: str) -> PageData:
        """Load one product page. Errors propagate; the caller decides."""
        page = await self._new_page()
        try:
            await page.goto(url, wait_until='networkidle', timeout=config.DETAIL_NAV_TIMEOUT)
            await page.wait_for_timeout(config.DETAIL_SETTLE)
            return await snapshot(page)
        finally:
            await page.close()

    # =========================================================================
    # PRODUCT WEBSITES
    # =========================================================================

    async def load_website(self, url: str) -> Optional[PageData]:
        """Load a product's own site. None on any failure."""
        if not url or not url.startswith('http'):
            return None

        page = await self._new_page()
        try:
            log.info(f"Visiting website {url}")
            await page.goto(url, wait_until='networkidle', timeout=config.WEBSITE_NAV_TIMEOUT)
            await page.wait_for_timeout(config.WEBSITE_SETTLE)
            return await snapshot(page)
        except Exception as e:
            log.warning(f"Website load failed for {url}: {e}")
            return None
        finally:
            await page.close()

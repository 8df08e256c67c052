"""
Stealth Browser Module

One Playwright browser + context configured to pass the listing site's
bot check. Pages opened from it share headers and init scripts.
"""

from playwright.async_api import async_playwright, Browser, Page, BrowserContext

from .patches import STEALTH_JS, USER_AGENT, EXTRA_HEADERS, VIEWPORT, get_stealth_args


async def create_stealth_browser(headless: bool = False) -> tuple:
    """
    Launch Chromium with stealth arguments.

    Returns:
        (playwright, browser) - caller must close both
    """
    playwright = await async_playwright().start()
    try:
        browser = await playwright.chromium.launch(
            headless=headless,
            args=get_stealth_args(),
        )
    except Exception:
        await playwright.stop()
        raise
    return playwright, browser


async def create_stealth_context(browser: Browser) -> BrowserContext:
    """Create a browser context with a realistic UA, headers and init script."""
    context = await browser.new_context(
        user_agent=USER_AGENT,
        viewport=VIEWPORT,
        locale='en-US',
        extra_http_headers=EXTRA_HEADERS,
    )

    # Runs before any page script
    await context.add_init_script(STEALTH_JS)

    return context


class StealthBrowser:
    """
    Context manager for stealth browsing.

    Usage:
        async with StealthBrowser() as browser:
            page = await browser.new_page()
            await page.goto('https://example.com')
    """

    def __init__(self, headless: bool = False):
        self.headless = headless
        self._playwright = None
        self._browser = None
        self._context = None

    async def __aenter__(self):
        self._playwright, self._browser = await create_stealth_browser(self.headless)
        try:
            self._context = await create_stealth_context(self._browser)
        except Exception:
            await self.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        if self._context:
            await self._context.close()
            self._context = None
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    async def new_page(self) -> Page:
        """Open a new page in the stealth context."""
        return await self._context.new_page()

    @property
    def context(self) -> BrowserContext:
        return self._context

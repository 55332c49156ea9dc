# spec_extractor/delegates/browser_delegate.py
import logging
from playwright.async_api import async_playwright, Playwright, Browser, BrowserContext, Page
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

class BrowserDelegate:
    """Owns the Chromium process and the single page every extraction step runs against."""
    def __init__(self, headless: bool, user_agent: str, viewport: Dict, browser_args: List[str], action_timeout: float):
        self.headless = headless
        self.user_agent = user_agent
        self.viewport = viewport
        self.browser_args = browser_args
        self.action_timeout = action_timeout
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None

    async def __aenter__(self):
        logger.debug("Starting Playwright and launching browser (headless=%s)...", self.headless)
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless,
                args=self.browser_args,
            )
            self._context = await self._browser.new_context(
                user_agent=self.user_agent,
                viewport=self.viewport,
            )
            self.page = await self._context.new_page()
        except Exception:
            # __aexit__ is not called when __aenter__ raises
            await self._close()
            raise

        # Playwright's own waits give up at the same point our per-action deadline would.
        self.page.set_default_timeout(self.action_timeout * 1000)
        self.page.on("console", lambda msg: logger.debug("CONSOLE: %s", msg.text))
        logger.info("Browser launched and page ready.")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        logger.info("Cleaning up browser...")
        await self._close()

    async def _close(self):
        # Each step runs even if the one before it raised.
        context, browser, playwright = self._context, self._browser, self._playwright
        self._context = self._browser = self._playwright = None
        self.page = None
        try:
            if context:
                await context.close()
        finally:
            try:
                if browser:
                    await browser.close()
            finally:
                if playwright:
                    await playwright.stop()
                logger.debug("Playwright resources released.")

"""
Manages Playwright browser instances for loading Miro boards.

This module provides the `PlaywrightManager` class, an asynchronous context manager
that starts Playwright, launches a browser, and opens pages with a fixed viewport
and pre-seeded cookies. It integrates with the application's configuration
system to determine browser type, headless mode and timeouts.
"""
from playwright.async_api import async_playwright, Playwright, Browser, BrowserContext, Page
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from miro_export.core.exceptions import RendererError
from miro_export.core.logger import get_logger

if TYPE_CHECKING:
    from miro_export.core.config import ConfigurationManager

logger = get_logger(__name__)


class PlaywrightManager:
    """
    Asynchronous context manager for Playwright browser instances.

    This class handles the lifecycle of Playwright, including starting the
    Playwright engine, launching a browser instance (Chromium, Firefox, or WebKit),
    and ensuring resources are properly closed upon exit.

    Attributes:
        browser_type (str): The type of browser to launch (e.g., 'chromium').
        headless (bool): Whether the browser runs without a window.
        playwright (Optional[Playwright]): The Playwright engine instance.
        browser (Optional[Browser]): The launched Playwright browser instance.
    """
    SUPPORTED_BROWSER_TYPES = ('chromium', 'firefox', 'webkit')
    DEFAULT_BROWSER_TYPE = 'chromium'
    DEFAULT_NAVIGATION_TIMEOUT = 30000  # Milliseconds
    DEFAULT_VIEWPORT = {'width': 1080, 'height': 1024}

    def __init__(self, config: Optional['ConfigurationManager'] = None):
        """
        Initializes the PlaywrightManager.

        Args:
            config (Optional[ConfigurationManager]): Source of the
                `components.playwright_manager.*` settings. If None, defaults are used.

        Raises:
            RendererError: If an unsupported browser type is configured.
        """
        if config:
            self.browser_type = config.get('components.playwright_manager.browser_type', self.DEFAULT_BROWSER_TYPE)
            self.headless = bool(config.get('components.playwright_manager.headless', True))
            self.launch_options: Dict[str, Any] = dict(config.get('components.playwright_manager.launch_options') or {})
            self.viewport: Dict[str, int] = dict(config.get('components.playwright_manager.viewport') or self.DEFAULT_VIEWPORT)
            self.navigation_timeout = int(config.get('components.playwright_manager.navigation_timeout_ms', self.DEFAULT_NAVIGATION_TIMEOUT))
        else:
            self.browser_type = self.DEFAULT_BROWSER_TYPE
            self.headless = True
            self.launch_options = {}
            self.viewport = dict(self.DEFAULT_VIEWPORT)
            self.navigation_timeout = self.DEFAULT_NAVIGATION_TIMEOUT

        if self.browser_type not in self.SUPPORTED_BROWSER_TYPES:
            logger.error(f"Unsupported browser type configured: {self.browser_type}")
            raise RendererError(f"Unsupported browser type: {self.browser_type}. Must be 'chromium', 'firefox', or 'webkit'.")

        logger.debug(f"PlaywrightManager configured to use browser: {self.browser_type} (headless={self.headless})")

        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None

    async def start(self) -> 'PlaywrightManager':
        """
        Starts the Playwright engine and launches the configured browser.

        Raises:
            RendererError: If Playwright fails to start or the browser fails to launch.
                           This can happen if browser binaries are not installed.
        """
        logger.debug(f"Starting Playwright and launching {self.browser_type} browser.")
        try:
            self.playwright = await async_playwright().start()
            browser_launcher = getattr(self.playwright, self.browser_type)
            self.browser = await browser_launcher.launch(headless=self.headless, **self.launch_options)
            logger.info(f"{self.browser_type} browser launched.")
        except Exception as e:
            logger.error(f"Failed to initialize Playwright or launch browser {self.browser_type}: {e}")
            if self.playwright:
                try:
                    await self.playwright.stop()
                except Exception as stop_e:
                    logger.error(f"Error stopping Playwright during startup cleanup: {stop_e}")
                self.playwright = None
            raise RendererError(f"Failed to initialize Playwright or launch browser {self.browser_type}: {e}")
        return self

    async def stop(self) -> None:
        """Closes the browser and stops the Playwright engine. Safe to call more than once."""
        if self.browser:
            try:
                await self.browser.close()
                logger.debug("Browser closed.")
            except Exception as e:
                logger.error(f"Error closing browser: {e}")
        if self.playwright:
            try:
                await self.playwright.stop()
                logger.debug("Playwright stopped.")
            except Exception as e:
                logger.error(f"Error stopping Playwright: {e}")

        self.browser = None
        self.playwright = None

    async def __aenter__(self) -> 'PlaywrightManager':
        return await self.start()

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.stop()

    async def open_page(self, url: str, cookies: Optional[List[Dict[str, Any]]] = None,
                        timeout: Optional[int] = None) -> Page:
        """
        Opens `url` in a fresh browser context and waits for the DOM to be ready.

        Args:
            url (str): The page to load.
            cookies (Optional[List[Dict]]): Cookies added to the context before navigating.
            timeout (Optional[int]): Navigation timeout in milliseconds.

        Returns:
            Page: The loaded page. It is closed together with the browser.

        Raises:
            RendererError: If the browser is not started or navigation fails.
        """
        if not self.browser:
            logger.error("open_page called but browser is not initialized.")
            raise RendererError("Browser is not initialized. Call start() or use 'async with PlaywrightManager()'.")

        effective_timeout = timeout if timeout is not None else self.navigation_timeout
        context: Optional[BrowserContext] = None
        try:
            context = await self.browser.new_context(viewport=self.viewport)
            if cookies:
                await context.add_cookies(cookies)
                logger.debug(f"Added {len(cookies)} cookie(s) to browser context.")
            page = await context.new_page()
            # 'domcontentloaded' only waits for the document; the Miro client keeps loading after it.
            await page.goto(url, wait_until='domcontentloaded', timeout=effective_timeout)
            logger.info(f"Loaded {url}.")
            return page
        except Exception as e:
            logger.error(f"Failed to open page '{url}': {e}")
            if context:
                try:
                    await context.close()
                except Exception as close_e:
                    logger.error(f"Error closing browser context for '{url}': {close_e}")
            raise RendererError(f"Failed to open page '{url}': {e}")

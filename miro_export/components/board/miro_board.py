"""
A headless browser session on a single Miro board.

`MiroBoard` loads the board page, waits until Miro's in-page client runtime
is usable, and then forwards two read operations into the page: querying
board objects and exporting the board (or a selection of it) as SVG.

Typical use::

    async with MiroBoard(board_id, token=token) as board:
        frames = await board.get_board_objects({"type": "frame"}, {"title": "Frame 1"})
        svg = await board.get_svg([frame.id for frame in frames])
"""
import asyncio
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union, TYPE_CHECKING

from playwright.async_api import Error as PlaywrightError, Page
from pydantic import ValidationError

from miro_export.components.board.filters import AttributeFilter, apply_filter
from miro_export.components.board.page_scripts import (
    AUTH_PROMPT_SELECTOR,
    EXPORT_VECTOR_SCRIPT,
    GET_BOARD_OBJECTS_SCRIPT,
    RUNTIME_READY_SCRIPT,
)
from miro_export.components.renderer.playwright_manager import PlaywrightManager
from miro_export.core.exceptions import BoardAuthenticationError, BoardError, BoardLoadTimeoutError
from miro_export.core.logger import get_logger
from miro_export.models.board_objects import BoardObject, BoardQuery, parse_board_objects

if TYPE_CHECKING:
    from miro_export.core.config import ConfigurationManager

logger = get_logger(__name__)

QueryLike = Union[BoardQuery, Mapping[str, Any], None]


class MiroBoard:
    """
    Browser session authenticated against one Miro board.

    Attributes:
        board_id (str): The Miro board ID.
        token (Optional[str]): Miro `token` cookie value. Optional if anonymous
            users may view the board.
        board_load_timeout_ms (int): How long to wait for the client runtime.
        poll_interval_ms (int): Delay between readiness probes.
        renderer (PlaywrightManager): Owner of the browser.
        page (Optional[Page]): The board page once `open()` succeeded.
    """
    DEFAULT_BASE_URL = "https://miro.com"
    DEFAULT_COOKIE_DOMAIN = "miro.com"
    DEFAULT_BOARD_LOAD_TIMEOUT = 15000  # Milliseconds
    DEFAULT_POLL_INTERVAL = 250  # Milliseconds

    def __init__(self, board_id: str, token: Optional[str] = None,
                 config: Optional['ConfigurationManager'] = None,
                 board_load_timeout_ms: Optional[int] = None,
                 renderer: Optional[PlaywrightManager] = None):
        if not board_id:
            raise BoardError("A board ID is required.")

        if config:
            self.base_url = config.get('components.miro_board.base_url', self.DEFAULT_BASE_URL)
            self.cookie_domain = config.get('components.miro_board.cookie_domain', self.DEFAULT_COOKIE_DOMAIN)
            configured_timeout = config.get('components.miro_board.board_load_timeout_ms', self.DEFAULT_BOARD_LOAD_TIMEOUT)
            self.poll_interval_ms = int(config.get('components.miro_board.poll_interval_ms', self.DEFAULT_POLL_INTERVAL))
        else:
            self.base_url = self.DEFAULT_BASE_URL
            self.cookie_domain = self.DEFAULT_COOKIE_DOMAIN
            configured_timeout = self.DEFAULT_BOARD_LOAD_TIMEOUT
            self.poll_interval_ms = self.DEFAULT_POLL_INTERVAL

        self.board_id = board_id
        self.token = token
        self.board_load_timeout_ms = int(board_load_timeout_ms if board_load_timeout_ms is not None else configured_timeout)
        self.renderer = renderer if renderer is not None else PlaywrightManager(config=config)
        self.page: Optional[Page] = None

    @property
    def board_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/app/board/{self.board_id}/"

    def _auth_cookies(self) -> List[Dict[str, Any]]:
        if not self.token:
            return []
        return [{
            "name": "token",
            "value": self.token,
            "domain": self.cookie_domain,
            "path": "/",
            "httpOnly": False,
            "secure": False,
        }]

    async def open(self) -> 'MiroBoard':
        """
        Launches the browser, loads the board and waits for the Miro runtime.

        The browser is shut down again if any step fails.

        Raises:
            RendererError: If the browser cannot be launched or the page cannot be loaded.
            BoardAuthenticationError: If the board shows its sign-up prompt.
            BoardLoadTimeoutError: If the runtime does not appear in time.
        """
        if self.page is not None:
            return self

        logger.info(f"Opening Miro board {self.board_id}.")
        await self.renderer.start()
        try:
            page = await self.renderer.open_page(self.board_url, cookies=self._auth_cookies())
            await self.wait_until_ready(page)
        except BaseException:
            await self.renderer.stop()
            raise
        self.page = page
        return self

    async def dispose(self) -> None:
        """Closes the browser. Safe to call more than once."""
        self.page = None
        await self.renderer.stop()

    async def __aenter__(self) -> 'MiroBoard':
        return await self.open()

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.dispose()

    async def wait_until_ready(self, page: Page) -> float:
        """
        Polls the page until `window.miro.board` exists.

        Each tick checks, in order: runtime available (done), sign-up prompt
        shown (authentication error), deadline passed (timeout).

        Returns:
            float: Milliseconds spent waiting.
        """
        loop = asyncio.get_running_loop()
        started = loop.time()
        deadline = started + self.board_load_timeout_ms / 1000

        while True:
            if await self._runtime_available(page):
                elapsed_ms = (loop.time() - started) * 1000
                logger.info(f"Miro runtime available after {elapsed_ms:.0f} ms.")
                return elapsed_ms

            if await self._auth_prompt_shown(page):
                logger.warning(f"Board {self.board_id} asks for authentication.")
                raise BoardAuthenticationError()

            now = loop.time()
            if now >= deadline:
                elapsed_ms = (now - started) * 1000
                logger.warning(f"Miro runtime not available after {elapsed_ms:.0f} ms; giving up.")
                raise BoardLoadTimeoutError(self.board_load_timeout_ms, elapsed_ms)

            await asyncio.sleep(min(self.poll_interval_ms / 1000, deadline - now))

    async def _runtime_available(self, page: Page) -> bool:
        try:
            return bool(await page.evaluate(RUNTIME_READY_SCRIPT))
        except PlaywrightError as e:
            # The client navigates while bootstrapping, which destroys the execution context.
            logger.debug(f"Readiness probe failed, retrying: {e}")
            return False

    async def _auth_prompt_shown(self, page: Page) -> bool:
        try:
            return await page.query_selector(AUTH_PROMPT_SELECTOR) is not None
        except PlaywrightError as e:
            logger.debug(f"Authentication prompt probe failed, retrying: {e}")
            return False

    def _require_page(self) -> Page:
        if self.page is None:
            raise BoardError("Board session is not open. Call open() or use 'async with MiroBoard(...)'.")
        return self.page

    async def get_board_objects(self, query: QueryLike = None,
                                additional_filter: Optional[AttributeFilter] = None) -> List[BoardObject]:
        """
        Fetches board objects through `window.miro.board.get()`.

        Args:
            query: Runtime filter on `type`, `id` and/or `tags`. Empty means every object.
            additional_filter: Attribute filter applied to the returned records,
                e.g. `{"title": ["Frame 1", "Frame 2"]}`. Keys use the runtime's names.

        Returns:
            List[BoardObject]: The matching objects in board order.

        Raises:
            BoardError: If the session is not open, the runtime call fails or a
                returned record is malformed.
        """
        page = self._require_page()
        if query is None:
            query = BoardQuery()
        elif not isinstance(query, BoardQuery):
            try:
                query = BoardQuery.model_validate(dict(query))
            except ValidationError as e:
                raise BoardError(f"Invalid board query {dict(query)}: only type, id and tags are supported by the runtime. {e}")
        runtime_filter = query.to_runtime_filter()

        try:
            records = await page.evaluate(GET_BOARD_OBJECTS_SCRIPT, runtime_filter)
        except PlaywrightError as e:
            raise BoardError(f"Failed to query board objects with filter {runtime_filter}: {e}")
        if not isinstance(records, list):
            raise BoardError(f"Unexpected result from board query: expected a list, got {type(records).__name__}.")

        matched = apply_filter(records, additional_filter)
        logger.debug(f"Board query {runtime_filter} returned {len(records)} object(s), {len(matched)} after filtering.")
        try:
            return parse_board_objects(matched)
        except ValidationError as e:
            raise BoardError(f"Unexpected board object record from the runtime: {e}")

    async def get_svg(self, object_ids: Optional[Iterable[str]] = None) -> str:
        """
        Exports the board as SVG markup.

        Args:
            object_ids: Objects to select before exporting. None or empty exports
                the entire board.

        Raises:
            BoardError: If the session is not open or the export fails.
        """
        page = self._require_page()
        ids = list(object_ids or [])
        try:
            svg = await page.evaluate(EXPORT_VECTOR_SCRIPT, ids)
        except PlaywrightError as e:
            raise BoardError(f"Failed to export board as SVG: {e}")
        if not isinstance(svg, str):
            raise BoardError(f"Unexpected result from vector export: expected a string, got {type(svg).__name__}.")

        scope = f"{len(ids)} object(s)" if ids else "entire board"
        logger.info(f"Exported {scope} as SVG ({len(svg)} characters).")
        return svg

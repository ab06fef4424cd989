"""Playwright automation on top of AgentCore Browser sessions.

Requires: pip install agentcore-tools[browser]
"""

import asyncio
import base64
import logging
from typing import Any, Awaitable, Callable, Literal

from playwright.async_api import Browser as CDPBrowser
from playwright.async_api import Page, Playwright, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .browser import Browser
from .exceptions import BrowserConnectionError, ElementNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_WAIT_TIMEOUT_MS = 30000
HISTORY_TIMEOUT_MS = 30000
HISTORY_WAIT_STRATEGIES = ("networkidle", "load")

WaitUntil = Literal["load", "domcontentloaded", "networkidle", "commit"]
SelectorState = Literal["attached", "detached", "visible", "hidden"]


class PlaywrightBrowser(Browser):
    """Browser automation client driving an AgentCore Browser with Playwright.

    The session is started on first use, and the Playwright connection is
    established once over CDP and reused until stop_session().

    Automation errors propagate as Playwright exceptions, except is_visible(),
    which answers False instead of raising.

    Example:
        >>> browser = PlaywrightBrowser(region="us-east-1")
        >>> try:
        ...     await browser.navigate("https://example.com")
        ...     print(await browser.get_text("h1"))
        ... finally:
        ...     await browser.stop_session()
    """

    def __init__(self, **kwargs: Any):
        super().__init__(**kwargs)
        self._playwright: Playwright | None = None
        self._browser: CDPBrowser | None = None
        self._page: Page | None = None
        self._connect_lock = asyncio.Lock()

    async def stop_session(self) -> None:
        """Close the Playwright connection, then stop the browser session."""
        async with self._connect_lock:
            await self._disconnect()
        await super().stop_session()

    async def _disconnect(self) -> None:
        browser, playwright = self._browser, self._playwright
        self._browser = self._playwright = self._page = None
        try:
            if browser is not None:
                await browser.close()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Error closing Playwright browser: %s", exc)
        try:
            if playwright is not None:
                await playwright.stop()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Error stopping Playwright: %s", exc)

    async def _ensure_connected(self) -> Page:
        """Ensure a session exists and Playwright is attached to it."""
        await self._ensure_session()
        async with self._connect_lock:
            if self._page is None:
                await self._connect()
            return self._page

    async def _connect(self) -> None:
        connection = await self.generate_ws_url()

        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.connect_over_cdp(
                connection.url,
                headers=connection.headers,
            )
            contexts = self._browser.contexts
            if not contexts:
                raise BrowserConnectionError("No browser contexts available")

            context = contexts[0]
            self._page = context.pages[0] if context.pages else await context.new_page()
        except BaseException:
            # No driver outlives a failed attachment.
            await self._disconnect()
            raise
        logger.debug("Attached to browser session %s", self._session.session_id)

    async def navigate(
        self,
        url: str,
        *,
        wait_until: WaitUntil = "domcontentloaded",
        timeout: float | None = None,
    ) -> None:
        """Navigate to a URL.

        Args:
            url: Target URL
            wait_until: When navigation counts as done (default: domcontentloaded)
            timeout: Navigation timeout in milliseconds
        """
        page = await self._ensure_connected()
        await page.goto(url, wait_until=wait_until, timeout=timeout)

    async def click(self, selector: str, *, timeout: float | None = None) -> None:
        """Click the element matching a CSS selector."""
        page = await self._ensure_connected()
        await page.click(selector, timeout=timeout)

    async def type(
        self,
        selector: str,
        text: str,
        *,
        delay: float | None = None,
        timeout: float | None = None,
    ) -> None:
        """Type text into an input, key by key.

        Args:
            selector: CSS selector of the input
            text: Text to type
            delay: Milliseconds between key presses
            timeout: Timeout in milliseconds
        """
        page = await self._ensure_connected()
        await page.type(selector, text, delay=delay, timeout=timeout)

    async def get_text(self, selector: str | None = None) -> str:
        """Text content of an element, or of the page body when no selector is given.

        Raises:
            ElementNotFoundError: If the selector matches nothing
        """
        page = await self._ensure_connected()
        if selector:
            element = await page.query_selector(selector)
            if element is None:
                raise ElementNotFoundError(selector)
            return await element.text_content() or ""
        return await page.text_content("body") or ""

    async def get_html(self, selector: str | None = None) -> str:
        """Inner HTML of an element, or the full page HTML when no selector is given.

        Raises:
            ElementNotFoundError: If the selector matches nothing
        """
        page = await self._ensure_connected()
        if selector:
            element = await page.query_selector(selector)
            if element is None:
                raise ElementNotFoundError(selector)
            return await element.inner_html()
        return await page.content()

    async def screenshot(
        self,
        *,
        path: str | None = None,
        full_page: bool = False,
        type: Literal["png", "jpeg"] = "png",
        encoding: Literal["binary", "base64"] = "binary",
    ) -> bytes | str:
        """Take a screenshot of the page.

        Args:
            path: Also save the image to this file
            full_page: Capture the full scrollable page
            type: Image format (default: png)
            encoding: "binary" for bytes, "base64" for a base64 string

        Returns:
            Image bytes, or a base64 string when encoding="base64"
        """
        page = await self._ensure_connected()
        data = await page.screenshot(path=path, full_page=full_page, type=type)
        if encoding == "base64":
            return base64.b64encode(data).decode("ascii")
        return data

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        """Evaluate JavaScript in the page and return its result."""
        page = await self._ensure_connected()
        return await page.evaluate(script, arg)

    async def back(self) -> None:
        """Go back in history."""
        page = await self._ensure_connected()
        await self._traverse_history(page, page.go_back, "window.history.back()")

    async def forward(self) -> None:
        """Go forward in history."""
        page = await self._ensure_connected()
        await self._traverse_history(page, page.go_forward, "window.history.forward()")

    async def _traverse_history(self, page: Page, step: Callable[..., Awaitable[Any]], script: str) -> None:
        # Pages with long-polling or trackers may never become network idle,
        # so each wait strategy only gets one timeout before the next is tried.
        for wait_until in HISTORY_WAIT_STRATEGIES:
            try:
                await step(wait_until=wait_until, timeout=HISTORY_TIMEOUT_MS)
                return
            except PlaywrightTimeoutError:
                logger.debug("History navigation timed out waiting for %s", wait_until)
        await page.evaluate(script)

    async def refresh(self) -> None:
        """Reload the current page."""
        page = await self._ensure_connected()
        await page.reload()

    async def get_cookies(self) -> list[dict[str, Any]]:
        """All cookies of the browser context."""
        page = await self._ensure_connected()
        return await page.context.cookies()

    async def set_cookies(self, cookies: list[dict[str, Any]]) -> None:
        """Add cookies to the browser context.

        Each cookie needs name and value plus url or domain/path.
        """
        page = await self._ensure_connected()
        await page.context.add_cookies(cookies)

    async def press_key(self, key: str) -> None:
        """Press a keyboard key (Enter, Tab, Escape, ...)."""
        page = await self._ensure_connected()
        await page.keyboard.press(key)

    async def wait_for_selector(
        self,
        selector: str,
        *,
        timeout: float = DEFAULT_WAIT_TIMEOUT_MS,
        visible: bool = True,
        state: SelectorState | None = None,
    ) -> None:
        """Wait for an element to reach a state.

        Args:
            selector: CSS selector
            timeout: Timeout in milliseconds (default 30000)
            visible: Wait for visibility rather than attachment (ignored if state is given)
            state: Explicit state to wait for
        """
        page = await self._ensure_connected()
        await page.wait_for_selector(
            selector,
            timeout=timeout,
            state=state or ("visible" if visible else "attached"),
        )

    async def fill(self, selector: str, value: str, *, timeout: float | None = None) -> None:
        """Replace the value of an input. More reliable than type() for forms."""
        page = await self._ensure_connected()
        await page.fill(selector, value, timeout=timeout)

    async def is_visible(self, selector: str) -> bool:
        """Whether an element is visible. Never raises on lookup failures."""
        page = await self._ensure_connected()
        try:
            element = await page.query_selector(selector)
            if element is None:
                return False
            return await element.is_visible()
        except Exception as exc:  # noqa: BLE001
            logger.debug("Visibility check for %s failed: %s", selector, exc)
            return False

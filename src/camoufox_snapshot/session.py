"""
Browser session management for Camoufox Snapshot MCP Server.

Owns the Camoufox browser and the active page, and binds the snapshot
builder and text waiter to that page.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from camoufox.async_api import AsyncCamoufox
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from camoufox_snapshot.config import get_config
from camoufox_snapshot.errors import NoActivePageError
from camoufox_snapshot.logging import get_logger
from camoufox_snapshot.metrics import get_metrics
from camoufox_snapshot.models import BrowserInfo, FilterPolicy, SnapshotNode, WaitResult, WaitSpec
from camoufox_snapshot.snapshot import SnapshotBuilder, build_filtered_snapshot
from camoufox_snapshot.text_waiter import wait_for

if TYPE_CHECKING:
    from playwright.async_api import Browser

logger = get_logger(__name__)

PAGE_TEXT_SCRIPT = "() => document.body ? document.body.innerText : ''"

# Messages Playwright uses when the page is mid-navigation; a closed page is
# not one of them and must surface as an error
_NAVIGATION_ERRORS = (
    "Execution context was destroyed",
    "Cannot find context with specified id",
)


class BrowserSession:
    """
    Manages a Camoufox browser session.

    This class handles:
    - Browser lifecycle (launch, close)
    - The active page
    - Snapshot capture and page text sampling for the active page
    """

    def __init__(self) -> None:
        self.browser: Browser | None = None
        self.page: Page | None = None
        self.snapshots = SnapshotBuilder()
        self._browser_cm: AsyncCamoufox | None = None
        self._launch_time: datetime | None = None
        self._config = get_config()
        self._metrics = get_metrics()

    @property
    def is_running(self) -> bool:
        """Check if browser is currently running."""
        return self.browser is not None

    @property
    def uptime_seconds(self) -> float:
        """Get browser session uptime in seconds."""
        if self._launch_time is None:
            return 0.0
        return (datetime.now(timezone.utc) - self._launch_time).total_seconds()

    async def launch(self, headless: bool | None = None, locale: str | None = None) -> str:
        """
        Launch a new browser session.

        Args:
            headless: Run in headless mode (uses config default if None)
            locale: Browser locale (e.g., "en-US")

        Returns:
            Status message
        """
        if self.browser is not None:
            return "Browser already running. Close it first with close_browser."

        if headless is None:
            headless = self._config.browser.default_headless

        kwargs: dict = {"headless": headless}
        if locale:
            kwargs["locale"] = locale

        try:
            self._browser_cm = AsyncCamoufox(**kwargs)
            self.browser = await asyncio.wait_for(
                self._browser_cm.__aenter__(),
                timeout=self._config.timeouts.browser_launch / 1000,
            )

            self.page = await self.browser.new_page()
            await self.page.set_viewport_size({
                "width": self._config.browser.default_viewport_width,
                "height": self._config.browser.default_viewport_height,
            })

            self._launch_time = datetime.now(timezone.utc)
            self._metrics.record_browser_launch()
            logger.info("browser_launched", headless=headless, locale=locale)
            return "Browser launched successfully."

        except asyncio.TimeoutError:
            logger.error("browser_launch_timeout")
            await self._cleanup()
            return "Error: Browser launch timed out."
        except Exception as e:
            logger.error("browser_launch_error", error=str(e))
            await self._cleanup()
            return f"Error launching browser: {str(e)}"

    async def close(self) -> str:
        """Close the browser session and clean up resources."""
        await self._cleanup()
        logger.info("browser_closed")
        return "Browser closed successfully."

    async def _cleanup(self) -> None:
        if self._browser_cm:
            try:
                await asyncio.wait_for(
                    self._browser_cm.__aexit__(None, None, None),
                    timeout=self._config.timeouts.page_close / 1000,
                )
            except Exception as e:
                logger.warning("browser_cleanup_error", error=str(e))

        self.browser = None
        self.page = None
        self._browser_cm = None
        self._launch_time = None

    def require_page(self) -> Page:
        """Return the active page or raise NoActivePageError."""
        if self.page is None:
            raise NoActivePageError()
        return self.page

    async def take_snapshot(
        self,
        verbose: bool = False,
        policy: FilterPolicy | None = None,
    ) -> SnapshotNode:
        """Capture the active page's accessibility tree and filter it."""
        page = self.require_page()
        root = await self.snapshots.capture(page, verbose=verbose)
        return build_filtered_snapshot(root, verbose=verbose, filter=policy)

    async def read_page_text(self, page: Page | None = None) -> str:
        """
        Return the rendered text of ``page`` (the active page by default).

        While the page is navigating there is no document to read; that case
        yields an empty string so a pending wait keeps polling.
        """
        page = page or self.require_page()
        try:
            return await page.evaluate(PAGE_TEXT_SCRIPT) or ""
        except PlaywrightError as e:
            if any(marker in str(e) for marker in _NAVIGATION_ERRORS):
                logger.debug("page_text_unavailable", error=str(e))
                return ""
            raise

    async def wait_for_text(self, spec: WaitSpec) -> WaitResult:
        """
        Wait until ``spec.text`` appears on the active page.

        The page is fixed when the wait starts; switching or closing the
        browser during the wait does not redirect sampling to another page.
        """
        page = self.require_page()

        async def sampler() -> str:
            return await self.read_page_text(page)

        try:
            result = await wait_for(
                spec, sampler, poll_interval_ms=self._config.wait.poll_interval_ms
            )
        except TimeoutError:
            self._metrics.record_wait("timeout")
            raise
        except asyncio.CancelledError:
            self._metrics.record_wait("cancelled")
            raise

        self._metrics.record_wait("found")
        return result

    def get_info(self) -> BrowserInfo:
        """Get information about the current browser session."""
        url = None
        if self.page is not None:
            try:
                url = self.page.url
            except Exception:
                url = "unknown"

        return BrowserInfo(
            status="running" if self.browser else "stopped",
            url=url,
            uptime_seconds=round(self.uptime_seconds, 2),
            snapshots_taken=self.snapshots.last_snapshot_id,
        )


# Global browser session instance
_session: BrowserSession | None = None


def get_session() -> BrowserSession:
    """Get the global browser session."""
    global _session
    if _session is None:
        _session = BrowserSession()
    return _session


def reset_session() -> None:
    """Reset the global session (useful for testing)."""
    global _session
    _session = None

"""Shared Chromium process hosting every extension's script context.

Each extension gets its own ``BrowserContext`` (a separate JS realm)
while sharing one browser process.  Concurrent ``warmup()`` calls are
guarded by an asyncio lock: the first caller launches Chromium, the
others wait and receive the same instance.
"""

from __future__ import annotations

import asyncio

import structlog
from playwright.async_api import Browser, Playwright, async_playwright

log = structlog.get_logger(__name__)


class SharedBrowserPool:
    """Lazily launched, crash-tolerant shared Chromium browser."""

    def __init__(self, *, headless: bool = True) -> None:
        self._headless = headless
        self._pw: Playwright | None = None
        self._browser: Browser | None = None
        self._lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        return self._browser is not None and self._browser.is_connected()

    async def warmup(self) -> Browser:
        """Return the running browser, (re)launching it when needed."""
        if self.is_running:
            assert self._browser is not None
            return self._browser

        async with self._lock:
            if self.is_running:
                assert self._browser is not None
                return self._browser

            # Browser crashed: drop the stale driver before relaunching
            if self._pw is not None:
                try:
                    await self._pw.stop()
                except Exception:  # noqa: BLE001
                    log.debug("shared_browser_stale_pw_stop_error", exc_info=True)
                self._pw = None
                self._browser = None

            self._pw = await async_playwright().start()
            self._browser = await self._pw.chromium.launch(headless=self._headless)
            log.info("shared_browser_launched", headless=self._headless)
            return self._browser

    async def cleanup(self) -> None:
        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception:  # noqa: BLE001
                log.warning("shared_browser_close_error", exc_info=True)
            self._browser = None
        if self._pw is not None:
            try:
                await self._pw.stop()
            except Exception:  # noqa: BLE001
                log.warning("shared_pw_stop_error", exc_info=True)
            self._pw = None
        log.info("shared_browser_cleaned_up")

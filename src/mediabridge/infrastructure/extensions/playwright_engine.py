"""Playwright-backed script engine.

Every extension runs in its own browser context on a blank page.  The
extension source is injected as a classic script, so its top-level
``function`` declarations become globals callable by name.  Host
capabilities are exposed on every context as async globals:

- ``httpGet(url, headers?)`` - GET via the shared httpx client, returns body text
- ``parseHtml(html)`` - BeautifulSoup-normalized markup
- ``sha256Hex(text)`` - hex SHA-256 of the UTF-8 text
"""

from __future__ import annotations

import hashlib
from typing import Any

import httpx
import structlog
from bs4 import BeautifulSoup
from playwright.async_api import BrowserContext, Page
from playwright.async_api import Error as PlaywrightError

from mediabridge.domain.entities.extension import ExtensionSource
from mediabridge.domain.extensions import ScriptExecutionError

from .shared_browser import SharedBrowserPool

log = structlog.get_logger(__name__)

_CALL_JS = """
async ([name, args]) => {
  const fn = globalThis[name];
  if (typeof fn !== "function") {
    throw new TypeError(`${name} is not a function`);
  }
  const result = await fn(...args);
  return result === undefined ? null : result;
}
"""


class HostFunctions:
    """Python implementations of the functions scripts may call."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    async def http_get(self, url: str, headers: dict[str, Any] | None = None) -> str:
        clean = {str(k): str(v) for k, v in (headers or {}).items()}
        resp = await self._http.get(url, headers=clean)
        log.debug("host_http_get", url=url, status=resp.status_code)
        return resp.text

    @staticmethod
    def parse_html(html: str) -> str:
        return str(BeautifulSoup(html, "html.parser"))

    @staticmethod
    def sha256_hex(text: str) -> str:
        return hashlib.sha256(text.encode("utf-8")).hexdigest()

    async def install(self, context: BrowserContext) -> None:
        await context.expose_function("httpGet", self.http_get)
        await context.expose_function("parseHtml", self.parse_html)
        await context.expose_function("sha256Hex", self.sha256_hex)


class PlaywrightScriptContext:
    """One extension's browser context and page."""

    def __init__(self, extension_id: str, context: BrowserContext, page: Page) -> None:
        self._extension_id = extension_id
        self._context = context
        self._page = page

    async def call(self, function: str, args: list[Any]) -> Any:
        try:
            return await self._page.evaluate(_CALL_JS, [function, args])
        except PlaywrightError as exc:
            raise ScriptExecutionError(
                self._extension_id, function, exc.message, exc.stack
            ) from exc

    async def close(self) -> None:
        try:
            await self._context.close()
        except Exception:  # noqa: BLE001
            log.warning(
                "script_context_close_error",
                extension_id=self._extension_id,
                exc_info=True,
            )


class PlaywrightScriptEngine:
    """Creates isolated script contexts on a shared Chromium browser."""

    def __init__(
        self,
        pool: SharedBrowserPool,
        http_client: httpx.AsyncClient,
        *,
        timeout_ms: int = 30_000,
    ) -> None:
        self._pool = pool
        self._host = HostFunctions(http_client)
        self._timeout_ms = timeout_ms

    async def create_context(self, source: ExtensionSource) -> PlaywrightScriptContext:
        browser = await self._pool.warmup()
        context = await browser.new_context()
        try:
            context.set_default_timeout(self._timeout_ms)
            await self._host.install(context)
            page = await context.new_page()
            await page.add_script_tag(content=source.source_code)
        except PlaywrightError as exc:
            await context.close()
            raise ScriptExecutionError(
                source.id, "<load>", exc.message, exc.stack
            ) from exc
        log.debug("script_source_loaded", extension_id=source.id)
        return PlaywrightScriptContext(source.id, context, page)

    async def cleanup(self) -> None:
        await self._pool.cleanup()

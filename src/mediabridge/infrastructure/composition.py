"""Composition root: builds and tears down every long-lived component."""

from __future__ import annotations

from types import TracebackType

import httpx
import structlog

from mediabridge.domain.extensions import ExtensionNotFoundError
from mediabridge.infrastructure.config.schema import AppConfig
from mediabridge.infrastructure.extensions import (
    ExtensionSourceMethods,
    ExtensionStore,
    PlaywrightScriptEngine,
    ScriptRuntime,
    SharedBrowserPool,
)
from mediabridge.infrastructure.extractors import (
    ExtractionDispatcher,
    ExtractorRegistry,
)

log = structlog.get_logger(__name__)


class Container:
    """Owns the shared HTTP clients, browser, runtime and dispatcher.

    Usage::

        async with Container(config) as container:
            streams = await container.dispatcher.extract(request)

    Order matters:
        1. Extension store (discovers manifests, fails before any I/O resource exists)
        2. HTTP clients (required by extractors and host functions)
        3. Extractor registry + dispatcher
        4. Browser pool + script engine + runtime
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config

        # ========== 1) Extensions (may raise on invalid manifests) ==========
        self.store = ExtensionStore()
        self.store.discover(config.extension_dir)

        # ========== 2) HTTP clients (shared resources) ==========
        self.http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(config.http_timeout_seconds),
            headers={"User-Agent": config.http_user_agent},
            follow_redirects=config.http_follow_redirects,
        )
        self.extractor_http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(config.extractor_timeout_seconds),
            headers={"User-Agent": config.http_user_agent},
            follow_redirects=True,
        )

        # ========== 3) Extractors ==========
        self.registry = ExtractorRegistry(http_client=self.extractor_http_client)
        self.dispatcher = ExtractionDispatcher(self.registry)

        # ========== 4) Script runtime ==========
        self.browser_pool = SharedBrowserPool(headless=config.playwright_headless)
        self.engine = PlaywrightScriptEngine(
            self.browser_pool,
            self.http_client,
            timeout_ms=config.playwright_timeout_ms,
        )
        self.runtime = ScriptRuntime(self.engine, self.store)
        self.store.attach_runtime(self.runtime)

        log.info(
            "container_initialized",
            extractors=len(self.registry.ids),
            extensions=len(self.store),
        )

    def source_methods(self, extension_id: str) -> ExtensionSourceMethods:
        """Bridge for one installed extension.

        Raises:
            ExtensionNotFoundError: No extension is installed under the id.
        """
        source = self.store.get(extension_id)
        if source is None:
            raise ExtensionNotFoundError(extension_id)
        return ExtensionSourceMethods(source, self.runtime)

    async def aclose(self) -> None:
        await self.runtime.close()
        await self.registry.aclose()
        await self.extractor_http_client.aclose()
        await self.http_client.aclose()
        log.info("container_closed")

    async def __aenter__(self) -> Container:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

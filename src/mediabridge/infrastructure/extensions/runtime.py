"""Script execution runtime: one lazily created interpreter context per extension.

Calls against the same extension id are serialized by a per-id
``asyncio.Lock`` (interpreter contexts are not reentrant); calls against
different ids run concurrently.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Any

import structlog

from mediabridge.domain.entities.extension import ExtensionSource
from mediabridge.domain.extensions import ExtensionNotFoundError, ScriptExecutionError
from mediabridge.domain.ports.extension_store import ExtensionStorePort
from mediabridge.domain.ports.script_engine import ScriptContextPort, ScriptEnginePort

log = structlog.get_logger(__name__)


class ContextState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    EXECUTING = "executing"
    DISPOSED = "disposed"


class ScriptRuntime:
    """Maps extension ids to interpreter contexts and invokes functions by name.

    Usage::

        runtime = ScriptRuntime(engine, store)
        result = await runtime.call_function("sample", "search", ["q", 1, []])

        # At shutdown:
        await runtime.close()
    """

    def __init__(self, engine: ScriptEnginePort, store: ExtensionStorePort) -> None:
        self._engine = engine
        self._store = store
        self._contexts: dict[str, ScriptContextPort] = {}
        self._context_sources: dict[str, ExtensionSource] = {}
        self._states: dict[str, ContextState] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, extension_id: str) -> asyncio.Lock:
        lock = self._locks.get(extension_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[extension_id] = lock
        return lock

    def state(self, extension_id: str) -> ContextState:
        return self._states.get(extension_id, ContextState.UNINITIALIZED)

    async def _ensure_context(
        self, extension_id: str, source: ExtensionSource
    ) -> ScriptContextPort:
        # Caller holds the per-id lock
        context = self._contexts.get(extension_id)
        if context is not None:
            if self._context_sources.get(extension_id) is source:
                return context
            # Reinstalled under the same id: drop the context built from the old script
            del self._contexts[extension_id]
            await context.close()
            log.info("script_context_replaced", extension_id=extension_id)

        context = await self._engine.create_context(source)
        self._contexts[extension_id] = context
        self._context_sources[extension_id] = source
        self._states[extension_id] = ContextState.READY
        log.info("script_context_created", extension_id=extension_id)
        return context

    async def call_function(
        self, extension_id: str, function: str, args: list[Any]
    ) -> Any:
        """Invoke ``function`` with ``args`` in the extension's context.

        The store is consulted again once the per-id lock is held, so a
        call queued behind an uninstall or upgrade sees the current
        installation.

        Raises:
            ExtensionNotFoundError: No extension is installed under the id.
            ScriptExecutionError: The script threw.
        """
        if self._store.get(extension_id) is None:
            raise ExtensionNotFoundError(extension_id)

        async with self._lock_for(extension_id):
            source = self._store.get(extension_id)
            if source is None:
                raise ExtensionNotFoundError(extension_id)
            context = await self._ensure_context(extension_id, source)
            self._states[extension_id] = ContextState.EXECUTING
            log.debug("script_call_started", extension_id=extension_id, function=function)
            try:
                result = await context.call(function, list(args))
            except ScriptExecutionError as exc:
                log.warning(
                    "script_call_failed",
                    extension_id=extension_id,
                    function=function,
                    error=exc.message,
                )
                raise
            finally:
                if self._states.get(extension_id) is ContextState.EXECUTING:
                    self._states[extension_id] = ContextState.READY
            log.debug("script_call_finished", extension_id=extension_id, function=function)
            return result

    async def dispose(self, extension_id: str) -> None:
        """Close the extension's context, if one was materialized.

        A later call re-creates it lazily.
        """
        async with self._lock_for(extension_id):
            context = self._contexts.pop(extension_id, None)
            self._context_sources.pop(extension_id, None)
            if context is None:
                return
            self._states[extension_id] = ContextState.DISPOSED
            await context.close()
            log.info("script_context_disposed", extension_id=extension_id)

    async def close(self) -> None:
        """Dispose every context and release the engine."""
        for extension_id in list(self._contexts):
            await self.dispose(extension_id)
        await self._engine.cleanup()

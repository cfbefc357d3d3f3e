"""Ports for the sandboxed script interpreter and the runtime on top of it."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from mediabridge.domain.entities.extension import ExtensionSource


@runtime_checkable
class ScriptContextPort(Protocol):
    """One isolated interpreter realm holding a single extension's script."""

    async def call(self, function: str, args: list[Any]) -> Any:
        """Invoke a global script function with JSON-serializable arguments.

        Raises ``ScriptExecutionError`` when the script throws.
        """
        ...

    async def close(self) -> None: ...


@runtime_checkable
class ScriptEnginePort(Protocol):
    """Factory for isolated interpreter contexts."""

    async def create_context(self, source: ExtensionSource) -> ScriptContextPort:
        """Materialize a fresh context and evaluate the extension source in it."""
        ...

    async def cleanup(self) -> None: ...


@runtime_checkable
class ScriptRuntimePort(Protocol):
    """Invoke-by-name primitive used by the extension bridge."""

    async def call_function(
        self, extension_id: str, function: str, args: list[Any]
    ) -> Any:
        """Call ``function`` in the extension's context.

        Raises ``ExtensionNotFoundError`` for unknown ids and
        ``ScriptExecutionError`` when the script throws.
        """
        ...

"""Port for installed extension lookup."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from mediabridge.domain.entities.extension import ExtensionSource
from mediabridge.domain.entities.extraction import MediaType


@runtime_checkable
class ExtensionStorePort(Protocol):
    """Keyed access to installed extensions."""

    def get(self, extension_id: str) -> ExtensionSource | None: ...
    def all(self) -> list[ExtensionSource]: ...
    def by_type(self, item_type: MediaType) -> list[ExtensionSource]: ...

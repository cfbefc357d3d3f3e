"""In-memory store of installed extensions with directory discovery."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from mediabridge.domain.entities.extension import ExtensionSource
from mediabridge.domain.entities.extraction import MediaType
from mediabridge.domain.extensions import DuplicateExtensionError

from .loader import load_extension_manifest

if TYPE_CHECKING:
    from .runtime import ScriptRuntime

log = structlog.get_logger(__name__)

_MANIFEST_SUFFIXES = {".yaml", ".yml"}


class ExtensionStore:
    """Installed extensions keyed by id.

    The store owns install/uninstall.  When a runtime is attached,
    removing an extension also disposes its interpreter context.
    """

    def __init__(self) -> None:
        self._sources: dict[str, ExtensionSource] = {}
        self._runtime: ScriptRuntime | None = None

    def attach_runtime(self, runtime: ScriptRuntime) -> None:
        self._runtime = runtime

    def __len__(self) -> int:
        return len(self._sources)

    def __contains__(self, extension_id: object) -> bool:
        return extension_id in self._sources

    def put(self, source: ExtensionSource) -> None:
        """Install or replace an extension.

        A replaced extension's interpreter context is rebuilt from the new
        source on its next call.
        """
        self._sources[source.id] = source
        log.info("extension_installed", extension_id=source.id, version=source.version)

    async def remove(self, extension_id: str) -> bool:
        """Uninstall an extension; returns whether it was installed."""
        source = self._sources.pop(extension_id, None)
        if source is None:
            return False
        if self._runtime is not None:
            await self._runtime.dispose(extension_id)
        log.info("extension_removed", extension_id=extension_id)
        return True

    def get(self, extension_id: str) -> ExtensionSource | None:
        return self._sources.get(extension_id)

    def all(self) -> list[ExtensionSource]:
        return sorted(self._sources.values(), key=lambda s: s.id)

    def by_type(self, item_type: MediaType) -> list[ExtensionSource]:
        return [s for s in self.all() if s.item_type == item_type]

    def discover(self, extension_dir: Path) -> int:
        """Load every manifest in *extension_dir* (sorted by file name).

        Returns the number of extensions loaded.  Invalid manifests and
        duplicate ids raise; a missing directory only logs a warning.
        """
        if not extension_dir.is_dir():
            log.warning("extension_directory_not_found", directory=str(extension_dir))
            return 0

        loaded: dict[str, ExtensionSource] = {}
        for path in sorted(extension_dir.iterdir(), key=lambda p: p.name):
            if path.is_dir() or path.suffix.lower() not in _MANIFEST_SUFFIXES:
                continue
            source = load_extension_manifest(path)
            if source.id in loaded or source.id in self._sources:
                raise DuplicateExtensionError(
                    f"Extension id '{source.id}' already exists"
                )
            loaded[source.id] = source

        for source in loaded.values():
            self.put(source)

        log.info(
            "extensions_discovered",
            count=len(loaded),
            directory=str(extension_dir),
        )
        if not loaded:
            log.warning("no_extensions_found", directory=str(extension_dir))
        return len(loaded)

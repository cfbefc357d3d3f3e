"""Port for resolving embed URLs to raw playable streams."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from mediabridge.domain.entities.extraction import ExtractionRequest, RawStream


@runtime_checkable
class StreamExtractorPort(Protocol):
    """Resolves an embed page to zero or more playable streams.

    Implementations handle host-specific logic (packed JS, iframes,
    playlist expansion, ...).  They may raise; the dispatcher isolates
    failures per extractor.
    """

    @property
    def name(self) -> str:
        """Stable extractor name used in logs (e.g. 'StreamWish')."""
        ...

    async def extract(self, request: ExtractionRequest) -> list[RawStream]:
        """Return playable streams, or an empty list when nothing was found."""
        ...

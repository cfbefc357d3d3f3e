"""Registry of extractor catalog entries, partitioned by category."""

from __future__ import annotations

from collections.abc import Sequence

import httpx
import structlog

from mediabridge.domain.entities.extraction import (
    ExtractionRequest,
    ExtractorCategory,
    ExtractorInfo,
)
from mediabridge.domain.extensions import DuplicateExtractorError

log = structlog.get_logger(__name__)


class ExtractorRegistry:
    """Holds the extractor catalog and answers "which entries handle this URL".

    Read-only after construction.  Callers may inject a replacement
    catalog per category; ``None`` loads the built-in catalog for video
    and an empty one for audio.

    The built-in catalog runs on *http_client*.  Without one, the
    registry creates its own client and ``aclose()`` releases it; an
    injected client stays owned by the caller.
    """

    def __init__(
        self,
        video_extractors: Sequence[ExtractorInfo] | None = None,
        audio_extractors: Sequence[ExtractorInfo] | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owned_client: httpx.AsyncClient | None = None
        if video_extractors is None:
            from ._http import default_client
            from .catalog import build_default_video_extractors

            if http_client is None:
                http_client = self._owned_client = default_client()
            video_extractors = build_default_video_extractors(http_client)

        self._catalog: dict[ExtractorCategory, tuple[ExtractorInfo, ...]] = {
            ExtractorCategory.VIDEO: tuple(video_extractors),
            ExtractorCategory.AUDIO: tuple(audio_extractors or ()),
        }
        self._reject_duplicate_ids()
        log.debug(
            "extractor_registry_built",
            video=len(self._catalog[ExtractorCategory.VIDEO]),
            audio=len(self._catalog[ExtractorCategory.AUDIO]),
        )

    def _reject_duplicate_ids(self) -> None:
        seen: set[str] = set()
        for entries in self._catalog.values():
            for info in entries:
                if info.id in seen:
                    raise DuplicateExtractorError(
                        f"Extractor id '{info.id}' already registered"
                    )
                seen.add(info.id)

    @property
    def ids(self) -> list[str]:
        """Return every registered entry id in catalog order."""
        return [info.id for entries in self._catalog.values() for info in entries]

    def by_category(self, category: ExtractorCategory) -> tuple[ExtractorInfo, ...]:
        """Return the entries of one category in declaration order."""
        return self._catalog[category]

    def match(self, request: ExtractionRequest) -> list[ExtractorInfo]:
        """Return every entry able to handle *request*, in catalog order.

        Filters by category, then media type (unrestricted entries match
        any type), then requires at least one URL pattern to match.
        """
        return [
            info
            for info in self.by_category(request.category)
            if (info.media_type is None or info.media_type == request.media_type)
            and info.matches_url(str(request.url))
        ]

    async def aclose(self) -> None:
        """Close the HTTP client the registry created for itself, if any."""
        if self._owned_client is not None:
            await self._owned_client.aclose()
            self._owned_client = None

"""Domain entities for embed URL extraction.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mediabridge.domain.ports.stream_extractor import StreamExtractorPort


class ExtractorCategory(str, Enum):
    """Kind of payload an extractor resolves."""

    VIDEO = "video"
    AUDIO = "audio"


class MediaType(str, Enum):
    """Media type an extension serves (values match the extension JSON)."""

    ANIME = "anime"
    MANGA = "manga"
    NOVEL = "novel"
    MOVIE = "movie"
    TV_SHOW = "tvShow"
    CARTOON = "cartoon"
    DOCUMENTARY = "documentary"
    LIVESTREAM = "livestream"
    NSFW = "nsfw"


@dataclass(frozen=True)
class ExtractionRequest:
    """Everything an extractor needs to resolve one embed URL.

    Constructed once per embed URL; use :meth:`with_url` to derive a
    request for a follow-up URL (e.g. an iframe source).
    """

    url: str
    category: ExtractorCategory = ExtractorCategory.VIDEO
    media_type: MediaType | None = None
    referer: str | None = None
    headers: dict[str, str] | None = None
    media_title: str | None = None
    server_name: str | None = None

    def with_url(self, url: str) -> ExtractionRequest:
        return replace(self, url=url)


@dataclass(frozen=True)
class SubtitleTrack:
    """Subtitle (or thumbnail) track attached to a stream."""

    url: str
    name: str | None = None
    language: str | None = None
    mime_type: str | None = None


_SUBTITLE_MIME_TYPES = {
    "vtt": "text/vtt",
    "srt": "text/srt",
    "sub": "text/sub",
    "sbv": "text/sbv",
    "smi": "text/smi",
    "ssa": "text/ssa",
    "ass": "text/ass",
}


def detect_subtitle_mime_type(url: str) -> str | None:
    """Guess the subtitle MIME type from the URL's file extension."""
    extension = url.rsplit(".", 1)[-1].lower()
    return _SUBTITLE_MIME_TYPES.get(extension)


@dataclass(frozen=True)
class RawStream:
    """Playable stream descriptor returned by an extractor.

    No identity beyond structural equality; callers may de-duplicate.
    """

    url: str
    is_m3u8: bool = False
    file_type: str | None = None
    quality: str | None = None  # "1080p", "auto", ...
    source_label: str | None = None  # Extractor name, e.g. "StreamWish"
    headers: dict[str, str] | None = None  # Required request headers
    subtitles: tuple[SubtitleTrack, ...] = ()


@dataclass(frozen=True)
class ExtractorInfo:
    """Catalog entry binding URL patterns to an ordered extractor group.

    ``media_type=None`` matches every media type.  An entry with no
    extractors is well-formed but never contributes streams.
    """

    id: str
    patterns: tuple[re.Pattern[str], ...]
    category: ExtractorCategory
    extractors: tuple[StreamExtractorPort, ...] = field(default_factory=tuple)
    media_type: MediaType | None = None

    def matches_url(self, url: str) -> bool:
        return any(pattern.search(url) for pattern in self.patterns)

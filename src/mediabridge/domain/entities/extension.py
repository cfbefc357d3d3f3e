"""Domain entities exchanged with extension scripts.

These mirror the JSON transport shape extensions produce and consume.
Decoding from raw script output lives in the infrastructure layer.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from .extraction import MediaType


@dataclass(frozen=True)
class ExtensionSource:
    """An installed extension: metadata plus its script source."""

    id: str
    name: str
    source_code: str
    version: str = "0.0.0"
    language: str = "en"
    item_type: MediaType = MediaType.ANIME
    url: str | None = None


@dataclass
class Episode:
    """Episode (or chapter) as listed by an extension."""

    url: str = ""
    name: str = ""
    date_upload: str | None = None
    episode_number: str | None = None
    scanlator: str | None = None
    thumbnail: str | None = None
    filler: bool = False

    def to_json(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "name": self.name,
            "dateUpload": self.date_upload,
            "episodeNumber": self.episode_number,
            "scanlator": self.scanlator,
            "thumbnail": self.thumbnail,
            "filler": self.filler,
        }


@dataclass
class Media:
    """Media item (anime, manga, novel, ...) as listed by an extension."""

    title: str = ""
    url: str = ""
    cover: str | None = None
    description: str | None = None
    author: str | None = None
    artist: str | None = None
    status: str | None = None
    genres: list[str] = field(default_factory=list)
    episodes: list[Episode] = field(default_factory=list)

    def to_json(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "cover": self.cover,
            "description": self.description,
            "author": self.author,
            "artist": self.artist,
            "status": self.status,
            "genre": list(self.genres),
            "episodes": [episode.to_json() for episode in self.episodes],
        }


@dataclass
class MediaPage:
    """One page of listing/search results."""

    items: list[Media] = field(default_factory=list)
    has_next_page: bool = False


@dataclass
class PageUrl:
    """Image page of a manga chapter."""

    url: str
    headers: dict[str, str] | None = None


@dataclass
class Track:
    """Subtitle or audio track attached to a video."""

    file: str
    label: str | None = None


@dataclass
class Video:
    """Video entry returned by ``getVideoList``.

    ``url`` may be a direct stream or an embed page that still needs
    extraction.
    """

    url: str
    quality: str = ""
    original_url: str = ""
    headers: dict[str, str] | None = None
    subtitles: list[Track] = field(default_factory=list)
    audios: list[Track] = field(default_factory=list)


@dataclass
class SourcePreference:
    """User-tunable extension setting."""

    key: str
    type: str = "text"  # "list", "switch", "text", "multi_select"
    title: str | None = None
    summary: str | None = None
    value: Any = None
    entries: list[str] = field(default_factory=list)
    entry_values: list[str] = field(default_factory=list)

    def to_json(self) -> dict[str, Any]:
        data = asdict(self)
        data["entryValues"] = data.pop("entry_values")
        return data

"""Pydantic validation models for extension manifests and script results."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from mediabridge.domain.entities.extraction import MediaType

EXTENSION_ID_RE = r"^[A-Za-z0-9_.-]+$"


class ExtensionManifest(BaseModel):
    """YAML manifest describing one installed extension."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1, pattern=EXTENSION_ID_RE)
    name: str = Field(..., min_length=1)
    version: str = "0.0.0"
    language: str = Field(default="en", validation_alias=AliasChoices("language", "lang"))
    item_type: MediaType = Field(
        default=MediaType.ANIME,
        validation_alias=AliasChoices("item_type", "itemType"),
    )
    url: Optional[str] = None

    # Exactly one of these carries the JS source
    source: Optional[str] = None
    script: Optional[str] = None

    @model_validator(mode="after")
    def _validate_source(self) -> "ExtensionManifest":
        if bool(self.source) == bool(self.script):
            raise ValueError("manifest needs exactly one of 'source' or 'script'")
        return self


# === Script result transport shapes ===


class _Transport(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class EpisodeResult(_Transport):
    url: str = ""
    name: str = ""
    date_upload: Optional[str] = Field(default=None, alias="dateUpload")
    episode_number: Optional[str] = Field(default=None, alias="episodeNumber")
    scanlator: Optional[str] = None
    thumbnail: Optional[str] = None
    filler: bool = False

    @model_validator(mode="before")
    @classmethod
    def _stringify_numbers(cls, data: Any) -> Any:
        # Scripts commonly emit numeric episode numbers and epoch dates
        if isinstance(data, dict):
            data = dict(data)
            for key in ("dateUpload", "date_upload", "episodeNumber", "episode_number"):
                if isinstance(data.get(key), (int, float)) and not isinstance(
                    data.get(key), bool
                ):
                    data[key] = str(data[key])
        return data


class MediaResult(_Transport):
    title: str = ""
    url: str = ""
    cover: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    artist: Optional[str] = None
    status: Optional[str] = None
    genres: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("genre", "genres")
    )
    episodes: List[EpisodeResult] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _coerce_status(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("status"), int):
            data = {**data, "status": str(data["status"])}
        return data


class MediaPageResult(_Transport):
    items: List[MediaResult] = Field(
        default_factory=list, validation_alias=AliasChoices("list", "items")
    )
    has_next_page: bool = Field(
        default=False, validation_alias=AliasChoices("hasNextPage", "has_next_page")
    )


class PageUrlResult(_Transport):
    url: str
    headers: Optional[Dict[str, str]] = None


class TrackResult(_Transport):
    file: str
    label: Optional[str] = None


class VideoResult(_Transport):
    url: str
    quality: str = ""
    original_url: str = Field(default="", alias="originalUrl")
    headers: Optional[Dict[str, str]] = None
    subtitles: List[TrackResult] = Field(default_factory=list)
    audios: List[TrackResult] = Field(default_factory=list)


class SourcePreferenceResult(_Transport):
    key: str
    type: str = "text"
    title: Optional[str] = None
    summary: Optional[str] = None
    value: Any = None
    entries: List[str] = Field(default_factory=list)
    entry_values: List[str] = Field(default_factory=list, alias="entryValues")

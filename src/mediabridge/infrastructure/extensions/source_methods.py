"""Typed bridge over the fixed set of functions every extension implements.

Script results arrive either already structured or as JSON text.  Text
is parsed first; then a mapping decodes to one object and a list to a
list of objects.  Malformed output never raises: list operations recover
to an empty list and object operations to their fallback value.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from mediabridge.domain.entities.extension import (
    Episode,
    ExtensionSource,
    Media,
    MediaPage,
    PageUrl,
    SourcePreference,
    Video,
)
from mediabridge.domain.extensions import MissingExtensionIdError
from mediabridge.domain.ports.script_engine import ScriptRuntimePort

from . import adapters
from . import validation_schema as schema

log = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


def _parse(raw: Any) -> Any:
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            return json.loads(raw)
        except ValueError:
            log.debug("extension_result_not_json", preview=str(raw)[:80])
            return None
    return raw


def decode_object(raw: Any, model: type[M]) -> M | None:
    data = _parse(raw)
    if not isinstance(data, Mapping):
        return None
    try:
        return model.model_validate(dict(data))
    except ValidationError as exc:
        log.warning("extension_result_invalid", model=model.__name__, errors=exc.errors())
        return None


def decode_list(raw: Any, model: type[M]) -> list[M]:
    data = _parse(raw)
    if isinstance(data, Mapping):
        data = [data]
    if not isinstance(data, list):
        return []

    items: list[M] = []
    for entry in data:
        if not isinstance(entry, Mapping):
            continue
        try:
            items.append(model.model_validate(dict(entry)))
        except ValidationError:
            log.debug("extension_result_item_skipped", model=model.__name__)
    return items


class ExtensionSourceMethods:
    """Calls one installed extension through the script runtime."""

    def __init__(self, source: ExtensionSource, runtime: ScriptRuntimePort) -> None:
        self.source = source
        self._runtime = runtime

    @property
    def extension_id(self) -> str:
        if not self.source.id:
            raise MissingExtensionIdError("Missing extension id")
        return self.source.id

    async def _call(self, function: str, *args: Any) -> Any:
        return await self._runtime.call_function(self.extension_id, function, list(args))

    def _media_page(self, raw: Any) -> MediaPage:
        page = decode_object(raw, schema.MediaPageResult)
        if page is None:
            return MediaPage()
        return adapters.to_domain_media_page(page)

    async def get_popular(self, page: int) -> MediaPage:
        return self._media_page(await self._call("getPopular", page))

    async def get_latest_updates(self, page: int) -> MediaPage:
        return self._media_page(await self._call("getLatestUpdates", page))

    async def search(
        self, query: str, page: int, filters: list[Any] | None = None
    ) -> MediaPage:
        return self._media_page(
            await self._call("search", query, page, list(filters or []))
        )

    async def get_detail(self, media: Media) -> Media:
        """Return the detailed media, or *media* itself when undecodable."""
        detail = decode_object(await self._call("getDetail", media.to_json()), schema.MediaResult)
        if detail is None:
            return media
        return adapters.to_domain_media(detail)

    async def get_page_list(self, episode: Episode) -> list[PageUrl]:
        raw = await self._call("getPageList", episode.to_json())
        return [adapters.to_domain_page_url(p) for p in decode_list(raw, schema.PageUrlResult)]

    async def get_video_list(self, episode: Episode) -> list[Video]:
        raw = await self._call("getVideoList", episode.to_json())
        return [adapters.to_domain_video(v) for v in decode_list(raw, schema.VideoResult)]

    async def get_novel_content(self, chapter_title: str, chapter_id: str) -> str | None:
        raw = await self._call("getNovelContent", chapter_title, chapter_id)
        return raw if isinstance(raw, str) else None

    async def get_preference(self) -> list[SourcePreference]:
        raw = await self._call("getPreference")
        return [
            adapters.to_domain_preference(p)
            for p in decode_list(raw, schema.SourcePreferenceResult)
        ]

    async def set_preference(self, pref: SourcePreference, value: Any) -> bool:
        """Succeeds only when the script returns the boolean ``true``."""
        raw = await self._call("setPreference", pref.to_json(), value)
        return raw is True

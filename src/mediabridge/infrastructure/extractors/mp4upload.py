"""Mp4Upload extractor: reads the ``player.src({...})`` call from the embed page.

Domains: mp4upload.*
"""

from __future__ import annotations

import re

import httpx
import structlog

from mediabridge.domain.entities.extraction import (
    ExtractionRequest,
    ExtractorCategory,
    ExtractorInfo,
    RawStream,
)

from ._http import request_headers
from .js_unpacker import extract_via_pattern

log = structlog.get_logger(__name__)

PATTERNS = (re.compile(r"mp4upload\."),)

_PLAYER_SRC_RE = re.compile(
    r'player\.src\(\s*\{\s*type:\s*"[^"]+",\s*src:\s*"([^"]+)"\s*\}\s*\);',
    re.DOTALL,
)


class Mp4UploadExtractor:
    """Extracts the MP4 source URL from Mp4Upload embeds."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "Mp4Upload"

    @classmethod
    def catalog_entry(cls, http_client: httpx.AsyncClient) -> ExtractorInfo:
        return ExtractorInfo(
            id="mp4upload",
            patterns=PATTERNS,
            category=ExtractorCategory.VIDEO,
            extractors=(cls(http_client),),
        )

    async def extract(self, request: ExtractionRequest) -> list[RawStream]:
        try:
            resp = await self._http.get(request.url, headers=request_headers(request))
        except httpx.HTTPError:
            log.warning("mp4upload_request_failed", url=request.url)
            return []

        stream_url = extract_via_pattern(resp.text, _PLAYER_SRC_RE)
        if not stream_url:
            log.warning("mp4upload_stream_not_found", url=request.url)
            return []

        return [
            RawStream(
                url=stream_url,
                is_m3u8=".m3u8" in stream_url,
                source_label=self.name,
                # Mp4Upload rejects playback without the embed referer
                headers={"Referer": request.url},
            )
        ]

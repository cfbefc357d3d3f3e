"""MixDrop extractor: reads ``MDCore.wurl`` from the unpacked player script.

Domains: mixdrop.*
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
from .js_unpacker import extract_variable, find_packed_blocks

log = structlog.get_logger(__name__)

PATTERNS = (
    re.compile(r"mixdrop\."),
    re.compile(r"mixdrop\.sb"),
    re.compile(r"mixdrop\.to"),
)


class MixDropExtractor:
    """Extracts direct video URLs from MixDrop embeds."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "MixDrop"

    @classmethod
    def catalog_entry(cls, http_client: httpx.AsyncClient) -> ExtractorInfo:
        return ExtractorInfo(
            id="mixdrop",
            patterns=PATTERNS,
            category=ExtractorCategory.VIDEO,
            extractors=(cls(http_client),),
        )

    async def extract(self, request: ExtractionRequest) -> list[RawStream]:
        try:
            resp = await self._http.get(request.url, headers=request_headers(request))
        except httpx.HTTPError:
            log.warning("mixdrop_request_failed", url=request.url)
            return []

        source = None
        for unpacked in find_packed_blocks(resp.text):
            source = extract_variable(unpacked, "wurl")
            if source:
                break
        if not source:
            log.warning("mixdrop_source_not_found", url=request.url)
            return []

        if not source.startswith("http"):
            source = f"https:{source}"

        log.debug("mixdrop_extracted", url=source[:80])
        return [RawStream(url=source, is_m3u8=".m3u8" in source, source_label=self.name)]

"""Filemoon extractor: follows the player iframe and unpacks its JWPlayer config.

Domains: filemoon.*, 2glho.org
"""

from __future__ import annotations

import re
from urllib.parse import urljoin

import httpx
import structlog
from bs4 import BeautifulSoup

from mediabridge.domain.entities.extraction import (
    ExtractionRequest,
    ExtractorCategory,
    ExtractorInfo,
    RawStream,
)

from ._http import origin, request_headers
from .js_unpacker import extract_via_pattern, find_packed_blocks

log = structlog.get_logger(__name__)

PATTERNS = (
    re.compile(r"filemoon\."),
    re.compile(r"filemoon\.to"),
    re.compile(r"2glho\.org"),
)

_SOURCES_RE = re.compile(r"""sources\s*:\s*\[\s*\{\s*file\s*:\s*["']([^"']+)["']""")


def _find_iframe_src(html: str, base_url: str) -> str | None:
    soup = BeautifulSoup(html, "html.parser")
    iframe = soup.find("iframe")
    src = iframe.get("src") if iframe is not None else None
    if not src or not isinstance(src, str):
        return None
    return urljoin(base_url, src)


class FilemoonExtractor:
    """Extracts the HLS master playlist from Filemoon embeds."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "Filemoon"

    @classmethod
    def catalog_entry(cls, http_client: httpx.AsyncClient) -> ExtractorInfo:
        return ExtractorInfo(
            id="filemoon",
            patterns=PATTERNS,
            category=ExtractorCategory.VIDEO,
            extractors=(cls(http_client),),
        )

    async def extract(self, request: ExtractionRequest) -> list[RawStream]:
        headers = request_headers(
            request,
            {
                "Accept": "text/html,application/xhtml+xml,*/*;q=0.8",
                "Accept-Language": "en-US,en;q=0.9",
                "Referer": origin(request.url),
                "Origin": request.url,
            },
        )

        try:
            resp = await self._http.get(request.url, headers=headers)
            iframe_src = _find_iframe_src(resp.text, request.url)
            if iframe_src is None:
                log.warning("filemoon_iframe_not_found", url=request.url)
                return []
            iframe_resp = await self._http.get(iframe_src, headers=headers)
        except httpx.HTTPError:
            log.warning("filemoon_request_failed", url=request.url)
            return []

        blocks = find_packed_blocks(iframe_resp.text)
        if not blocks:
            log.warning("filemoon_packed_js_not_found", url=iframe_src)
            return []

        for unpacked in blocks:
            normalized = unpacked.replace("\\'", "'").replace('\\"', '"')
            m3u8 = extract_via_pattern(normalized, _SOURCES_RE)
            if m3u8:
                log.debug("filemoon_extracted", url=m3u8[:80])
                return [RawStream(url=m3u8, is_m3u8=True, source_label=self.name)]

        log.warning("filemoon_source_not_found", url=iframe_src)
        return []

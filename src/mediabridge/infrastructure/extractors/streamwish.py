"""StreamWish extractor: decodes the packed player config on streamwish pages.

The embed page carries a Dean Edwards packed JWPlayer setup.  After
unpacking, the master ``.m3u8`` URL and caption/thumbnail tracks are read
from it, then the master playlist is expanded into per-resolution
variants.

Domains: streamwish.*, dhcplay.*
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
    SubtitleTrack,
    detect_subtitle_mime_type,
)

from ._http import origin, request_headers
from .js_unpacker import find_packed_blocks

log = structlog.get_logger(__name__)

PATTERNS = (re.compile(r"streamwish\."), re.compile(r"dhcplay\."))

_M3U8_RE = re.compile(r"""https?://[^"']+?\.m3u8[^"']*""")

_TRACK_RE = re.compile(
    r'\{file:"([^"]+)",(?:label:"([^"]+)",)?kind:"(thumbnails|captions)"'
)

_PAGE_HEADERS = {
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/avif,image/webp,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.9",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Upgrade-Insecure-Requests": "1",
}


def _find_master_url(decoded: str) -> str | None:
    match = _M3U8_RE.search(decoded)
    if not match:
        return None
    link = match.group(0)
    if 'hls2"' in link:
        link = link.replace('hls2"', "").replace('"', "")
    return link


def _parse_tracks(decoded: str, page_origin: str) -> tuple[SubtitleTrack, ...]:
    tracks: list[SubtitleTrack] = []
    for file, label, kind in _TRACK_RE.findall(decoded):
        if kind == "thumbnails":
            url = f"{page_origin}{file}"
            tracks.append(
                SubtitleTrack(
                    url=url,
                    name=kind,
                    language=kind,
                    mime_type=detect_subtitle_mime_type(url),
                )
            )
            continue
        tracks.append(
            SubtitleTrack(
                url=file,
                name=label or None,
                language=label or None,
                mime_type=detect_subtitle_mime_type(file),
            )
        )
    return tuple(tracks)


def parse_variants(
    playlist: str, master_link: str, headers: dict[str, str], label: str
) -> list[RawStream]:
    """Turn a master playlist into one stream per ``#EXT-X-STREAM-INF`` entry."""
    if "EXTM3U" not in playlist:
        return []
    base = master_link.split("master.m3u8")[0]
    variants: list[RawStream] = []
    for part in playlist.split("#EXT-X-STREAM-INF:"):
        if "m3u8" not in part:
            continue
        lines = part.split("\n")
        if len(lines) < 2:
            continue
        resolution = re.search(r"RESOLUTION=\d+x(\d+)", lines[0])
        quality = f"{resolution.group(1)}p" if resolution else "auto"
        variants.append(
            RawStream(
                url=f"{base}{lines[1].strip()}",
                is_m3u8=True,
                quality=quality,
                source_label=label,
                headers=headers,
            )
        )
    return variants


class StreamWishExtractor:
    """Extracts HLS streams (plus variants and tracks) from StreamWish embeds."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "StreamWish"

    @classmethod
    def catalog_entry(cls, http_client: httpx.AsyncClient) -> ExtractorInfo:
        return ExtractorInfo(
            id="streamwish",
            patterns=PATTERNS,
            category=ExtractorCategory.VIDEO,
            extractors=(cls(http_client),),
        )

    async def extract(self, request: ExtractionRequest) -> list[RawStream]:
        page_origin = origin(request.url)
        headers = request_headers(
            request,
            {**_PAGE_HEADERS, "Origin": page_origin, "Referer": page_origin},
        )

        try:
            resp = await self._http.get(request.url, headers=headers)
        except httpx.HTTPError:
            log.warning("streamwish_request_failed", url=request.url)
            return []
        if resp.status_code != 200:
            log.warning("streamwish_http_error", status=resp.status_code, url=request.url)
            return []

        master = None
        decoded = ""
        for block in find_packed_blocks(resp.text):
            master = _find_master_url(block)
            if master:
                decoded = block
                break
        if not master:
            log.warning("streamwish_m3u8_not_found", url=request.url)
            return []

        separator = "&" if "?" in master else "?"
        stream_url = f"{master}{separator}i=0.4"

        results = [
            RawStream(
                url=stream_url,
                is_m3u8=".m3u8" in stream_url,
                source_label=self.name,
                headers=headers,
                subtitles=_parse_tracks(decoded, page_origin),
            )
        ]

        try:
            playlist = await self._http.get(stream_url, headers=headers)
            results.extend(parse_variants(playlist.text, master, headers, self.name))
        except httpx.HTTPError:
            log.debug("streamwish_variant_expansion_failed", url=stream_url)

        log.debug("streamwish_extracted", url=request.url, count=len(results))
        return results

"""Tests for FilemoonExtractor."""

from __future__ import annotations

import httpx
import pytest
import respx

from mediabridge.domain.entities.extraction import ExtractionRequest
from mediabridge.infrastructure.extractors.filemoon import FilemoonExtractor

_EMBED = "https://filemoon.sx/e/abc123"
_IFRAME = "https://player.example.net/frame/abc123"
_M3U8 = "https://cdn.example.net/hls/abc/master.m3u8?t=tok"

_OUTER = f'<html><body><iframe src="{_IFRAME}" allowfullscreen></iframe></body></html>'

_INNER = (
    "<script>eval(function(p,a,c,k,e,d){while(c--)if(k[c])p=p.replace("
    "new RegExp('\\\\b'+c.toString(a)+'\\\\b','g'),k[c]);return p}"
    f"('0(\"1\").2({{sources:[{{file:\"{_M3U8}\"}}]}})',36,3,"
    "'jwplayer|vplayer|setup'.split('|'),0,{}))</script>"
)


class TestExtract:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_follows_iframe_and_unpacks(self) -> None:
        respx.get(_EMBED).respond(200, text=_OUTER)
        respx.get(_IFRAME).respond(200, text=_INNER)

        async with httpx.AsyncClient() as client:
            streams = await FilemoonExtractor(client).extract(
                ExtractionRequest(url=_EMBED)
            )

        assert len(streams) == 1
        assert streams[0].url == _M3U8
        assert streams[0].is_m3u8
        assert streams[0].source_label == "Filemoon"

    @respx.mock
    @pytest.mark.asyncio()
    async def test_relative_iframe_src(self) -> None:
        respx.get(_EMBED).respond(200, text='<iframe src="/frame/abc123"></iframe>')
        respx.get("https://filemoon.sx/frame/abc123").respond(200, text=_INNER)

        async with httpx.AsyncClient() as client:
            streams = await FilemoonExtractor(client).extract(
                ExtractionRequest(url=_EMBED)
            )

        assert [s.url for s in streams] == [_M3U8]

    @respx.mock
    @pytest.mark.asyncio()
    async def test_no_iframe(self) -> None:
        respx.get(_EMBED).respond(200, text="<html></html>")

        async with httpx.AsyncClient() as client:
            assert await FilemoonExtractor(client).extract(
                ExtractionRequest(url=_EMBED)
            ) == []

    @respx.mock
    @pytest.mark.asyncio()
    async def test_iframe_without_packed_js(self) -> None:
        respx.get(_EMBED).respond(200, text=_OUTER)
        respx.get(_IFRAME).respond(200, text="<html>plain</html>")

        async with httpx.AsyncClient() as client:
            assert await FilemoonExtractor(client).extract(
                ExtractionRequest(url=_EMBED)
            ) == []

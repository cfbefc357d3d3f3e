"""Tests for MixDropExtractor."""

from __future__ import annotations

import httpx
import pytest
import respx

from mediabridge.domain.entities.extraction import ExtractionRequest
from mediabridge.infrastructure.extractors.mixdrop import MixDropExtractor

_EMBED = "https://mixdrop.ag/e/abc123"


def _page(payload: str, words: str) -> str:
    count = len(words.split("|"))
    return (
        "<script>eval(function(p,a,c,k,e,d){while(c--)if(k[c])p=p.replace("
        "new RegExp('\\\\b'+c.toString(a)+'\\\\b','g'),k[c]);return p}"
        f"('{payload}',36,{count},'{words}'.split('|'),0,{{}}))</script>"
    )


class TestExtract:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_scheme_relative_wurl(self) -> None:
        html = _page('0.1="//s-delivery.mxcontent.net/v/abc.mp4?s=x"', "MDCore|wurl")
        respx.get(_EMBED).respond(200, text=html)

        async with httpx.AsyncClient() as client:
            streams = await MixDropExtractor(client).extract(
                ExtractionRequest(url=_EMBED)
            )

        assert [s.url for s in streams] == [
            "https://s-delivery.mxcontent.net/v/abc.mp4?s=x"
        ]
        assert streams[0].source_label == "MixDrop"

    @respx.mock
    @pytest.mark.asyncio()
    async def test_absolute_wurl_unchanged(self) -> None:
        html = _page('0.1="https://cdn.example.net/v.mp4"', "MDCore|wurl")
        respx.get(_EMBED).respond(200, text=html)

        async with httpx.AsyncClient() as client:
            streams = await MixDropExtractor(client).extract(
                ExtractionRequest(url=_EMBED)
            )

        assert streams[0].url == "https://cdn.example.net/v.mp4"

    @respx.mock
    @pytest.mark.asyncio()
    async def test_no_wurl(self) -> None:
        respx.get(_EMBED).respond(200, text=_page('0.1="x"', "MDCore|poster"))

        async with httpx.AsyncClient() as client:
            assert await MixDropExtractor(client).extract(
                ExtractionRequest(url=_EMBED)
            ) == []

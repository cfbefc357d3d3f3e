"""Tests for StreamTapeExtractor."""

from __future__ import annotations

import httpx
import pytest
import respx

from mediabridge.domain.entities.extraction import ExtractionRequest
from mediabridge.infrastructure.extractors.streamtape import (
    StreamTapeExtractor,
    build_robotlink_url,
)

_EMBED = "https://streamtape.com/e/abc123"

_ROBOTLINK_PAGE = """
<div id="robotlink" style="display:none;">/streamtape.com/get_video?id=abc123</div>
<script>
document.getElementById('robotlink').innerHTML = '//streamtape.com/get_video?id=abc123&expires=1700000000&ip=XYZ&token=' + ('xyzREALTOKEN').substring(3);
</script>
"""

_PARAMS_PAGE = """
<div id="ideoolink">/streamtape.com/get_video?id=abc123&expires=1700000000&ip=XYZ&token=tok123"</div>
"""


class TestBuildRobotlinkUrl:
    def test_evaluates_expression(self) -> None:
        assert build_robotlink_url(_ROBOTLINK_PAGE) == (
            "https://streamtape.com/get_video?id=abc123&expires=1700000000"
            "&ip=XYZ&token=REALTOKEN"
        )

    def test_missing(self) -> None:
        assert build_robotlink_url("<html></html>") is None


class TestExtract:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_robotlink(self) -> None:
        respx.get(_EMBED).respond(200, text=_ROBOTLINK_PAGE)

        async with httpx.AsyncClient() as client:
            streams = await StreamTapeExtractor(client).extract(
                ExtractionRequest(url=_EMBED)
            )

        assert len(streams) == 1
        assert streams[0].url.endswith("token=REALTOKEN")
        assert not streams[0].is_m3u8
        assert streams[0].source_label == "StreamTape"

    @respx.mock
    @pytest.mark.asyncio()
    async def test_param_fallback(self) -> None:
        respx.get(_EMBED).respond(200, text=_PARAMS_PAGE)

        async with httpx.AsyncClient() as client:
            streams = await StreamTapeExtractor(client).extract(
                ExtractionRequest(url=_EMBED)
            )

        assert streams[0].url == (
            "https://streamtape.com/get_video?id=abc123&expires=1700000000"
            "&ip=XYZ&token=tok123&stream=1"
        )

    @respx.mock
    @pytest.mark.asyncio()
    async def test_video_not_found(self) -> None:
        respx.get(_EMBED).respond(200, text="<h1>Video not found</h1>")

        async with httpx.AsyncClient() as client:
            assert await StreamTapeExtractor(client).extract(
                ExtractionRequest(url=_EMBED)
            ) == []

    @respx.mock
    @pytest.mark.asyncio()
    async def test_connection_error(self) -> None:
        respx.get(_EMBED).mock(side_effect=httpx.ConnectError("down"))

        async with httpx.AsyncClient() as client:
            assert await StreamTapeExtractor(client).extract(
                ExtractionRequest(url=_EMBED)
            ) == []

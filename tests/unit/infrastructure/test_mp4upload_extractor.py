"""Tests for Mp4UploadExtractor."""

from __future__ import annotations

import httpx
import pytest
import respx

from mediabridge.domain.entities.extraction import ExtractionRequest
from mediabridge.infrastructure.extractors.mp4upload import Mp4UploadExtractor

_EMBED = "https://www.mp4upload.com/embed-abc123.html"

_PAGE = """
<script>
player.src({
    type: "video/mp4",
    src: "https://a4.mp4upload.com:183/d/abc/video.mp4"
});
</script>
"""


class TestExtract:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_reads_player_src(self) -> None:
        respx.get(_EMBED).respond(200, text=_PAGE)

        async with httpx.AsyncClient() as client:
            streams = await Mp4UploadExtractor(client).extract(
                ExtractionRequest(url=_EMBED)
            )

        assert len(streams) == 1
        assert streams[0].url == "https://a4.mp4upload.com:183/d/abc/video.mp4"
        assert streams[0].headers == {"Referer": _EMBED}
        assert not streams[0].is_m3u8

    @respx.mock
    @pytest.mark.asyncio()
    async def test_missing_player(self) -> None:
        respx.get(_EMBED).respond(200, text="<html>removed</html>")

        async with httpx.AsyncClient() as client:
            assert await Mp4UploadExtractor(client).extract(
                ExtractionRequest(url=_EMBED)
            ) == []

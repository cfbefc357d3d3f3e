"""Tests for ResolveEpisodeStreams."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from mediabridge.application.use_cases.resolve_episode_streams import (
    ResolveEpisodeStreams,
    is_direct_stream,
)
from mediabridge.domain.entities.extension import Episode, ExtensionSource, Track, Video
from mediabridge.domain.entities.extraction import (
    ExtractionRequest,
    ExtractorCategory,
    MediaType,
    RawStream,
)


def _use_case(
    videos: list[Video], extracted: list[RawStream] | None = None
) -> tuple[ResolveEpisodeStreams, AsyncMock]:
    source_methods = MagicMock()
    source_methods.source = ExtensionSource(
        id="sample", name="Sample", source_code="", item_type=MediaType.MOVIE
    )
    source_methods.get_video_list = AsyncMock(return_value=videos)
    dispatcher = MagicMock()
    dispatcher.extract = AsyncMock(return_value=extracted or [])
    return ResolveEpisodeStreams(source_methods, dispatcher), dispatcher.extract


class TestIsDirectStream:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://cdn/v/master.m3u8", True),
            ("https://cdn/v/master.m3u8?token=1", True),
            ("https://cdn/v/file.MP4", True),
            ("https://streamwish.to/e/abc", False),
            ("https://cdn/m3u8-player/abc", False),
        ],
    )
    def test_detection(self, url: str, expected: bool) -> None:
        assert is_direct_stream(url) is expected


class TestExecute:
    @pytest.mark.asyncio()
    async def test_direct_streams_bypass_dispatcher(self) -> None:
        video = Video(
            url="https://cdn/v/master.m3u8",
            quality="1080p",
            headers={"Referer": "https://site/"},
            subtitles=[Track(file="https://s/en.vtt", label="English")],
        )
        use_case, extract = _use_case([video])

        streams = await use_case.execute(Episode(url="/ep/1", name="Ep 1"))

        extract.assert_not_awaited()
        assert len(streams) == 1
        stream = streams[0]
        assert stream.is_m3u8
        assert stream.quality == "1080p"
        assert stream.source_label == "Sample"
        assert stream.subtitles[0].mime_type == "text/vtt"

    @pytest.mark.asyncio()
    async def test_embeds_are_dispatched(self) -> None:
        extracted = [RawStream(url="https://cdn/x.m3u8", is_m3u8=True)]
        video = Video(
            url="https://streamwish.to/e/abc",
            quality="StreamWish",
            headers={"referer": "https://site/"},
        )
        use_case, extract = _use_case([video], extracted)

        streams = await use_case.execute(Episode(url="/ep/1", name="Ep 1"))

        assert streams == extracted
        request: ExtractionRequest = extract.await_args.args[0]
        assert request.url == "https://streamwish.to/e/abc"
        assert request.category is ExtractorCategory.VIDEO
        assert request.media_type is MediaType.MOVIE
        assert request.referer == "https://site/"
        assert request.media_title == "Ep 1"

    @pytest.mark.asyncio()
    async def test_deduplicates_preserving_order(self) -> None:
        a = RawStream(url="https://cdn/a.m3u8", headers={"Referer": "r"})
        b = RawStream(url="https://cdn/b.m3u8")
        use_case, _ = _use_case(
            [Video(url="https://host/e/1"), Video(url="https://host/e/2")],
            [a, b, a],
        )

        streams = await use_case.execute(Episode())

        assert streams == [a, b]

    @pytest.mark.asyncio()
    async def test_empty_video_list(self) -> None:
        use_case, extract = _use_case([])
        assert await use_case.execute(Episode()) == []
        extract.assert_not_awaited()

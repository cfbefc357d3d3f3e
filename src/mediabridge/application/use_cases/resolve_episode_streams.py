"""Episode stream resolution use case.

Extension ``getVideoList`` -> direct streams pass through, embed pages
go through the extraction dispatcher -> de-duplicated RawStream list.
"""

from __future__ import annotations

import re
from typing import Protocol

import structlog

from mediabridge.domain.entities.extension import Episode, ExtensionSource, Video
from mediabridge.domain.entities.extraction import (
    ExtractionRequest,
    ExtractorCategory,
    RawStream,
    SubtitleTrack,
    detect_subtitle_mime_type,
)

log = structlog.get_logger(__name__)

_DIRECT_STREAM_RE = re.compile(r"\.(m3u8|mp4)(?:$|[?#])", re.IGNORECASE)


class _VideoListSource(Protocol):
    """Extension bridge subset consumed by this use case."""

    source: ExtensionSource

    async def get_video_list(self, episode: Episode) -> list[Video]: ...


class _Dispatcher(Protocol):
    async def extract(self, request: ExtractionRequest) -> list[RawStream]: ...


def is_direct_stream(url: str) -> bool:
    """Whether *url* already points at a playable HLS playlist or MP4 file."""
    return _DIRECT_STREAM_RE.search(url) is not None


def _referer_of(video: Video) -> str | None:
    for key, value in (video.headers or {}).items():
        if key.lower() == "referer":
            return value
    return None


def _direct_stream(video: Video, label: str) -> RawStream:
    return RawStream(
        url=video.url,
        is_m3u8=".m3u8" in video.url.lower(),
        quality=video.quality or None,
        source_label=label,
        headers=video.headers,
        subtitles=tuple(
            SubtitleTrack(
                url=track.file,
                name=track.label,
                language=track.label,
                mime_type=detect_subtitle_mime_type(track.file),
            )
            for track in video.subtitles
        ),
    )


class ResolveEpisodeStreams:
    """Turns an extension's video list for one episode into playable streams."""

    def __init__(self, source_methods: _VideoListSource, dispatcher: _Dispatcher) -> None:
        self._source_methods = source_methods
        self._dispatcher = dispatcher

    async def execute(self, episode: Episode) -> list[RawStream]:
        source = self._source_methods.source
        videos = await self._source_methods.get_video_list(episode)

        streams: list[RawStream] = []
        for video in videos:
            if is_direct_stream(video.url):
                streams.append(_direct_stream(video, source.name))
                continue

            request = ExtractionRequest(
                url=video.url,
                category=ExtractorCategory.VIDEO,
                media_type=source.item_type,
                referer=_referer_of(video),
                media_title=episode.name or None,
                server_name=video.quality or None,
            )
            streams.extend(await self._dispatcher.extract(request))

        # Equality-based: headers dicts are unhashable
        unique: list[RawStream] = []
        for stream in streams:
            if stream not in unique:
                unique.append(stream)
        log.info(
            "episode_streams_resolved",
            extension_id=source.id,
            videos=len(videos),
            streams=len(unique),
        )
        return unique

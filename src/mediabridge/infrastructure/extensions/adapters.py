"""Adapters to convert Pydantic validation models to domain models."""

from __future__ import annotations

from mediabridge.domain.entities import extension as domain
from mediabridge.infrastructure.extensions import validation_schema as infra


def to_domain_source(
    pydantic: infra.ExtensionManifest, source_code: str
) -> domain.ExtensionSource:
    """Convert a validated manifest plus its script text to domain model."""
    return domain.ExtensionSource(
        id=pydantic.id,
        name=pydantic.name,
        source_code=source_code,
        version=pydantic.version,
        language=pydantic.language,
        item_type=pydantic.item_type,
        url=pydantic.url,
    )


def to_domain_episode(pydantic: infra.EpisodeResult) -> domain.Episode:
    return domain.Episode(
        url=pydantic.url,
        name=pydantic.name,
        date_upload=pydantic.date_upload,
        episode_number=pydantic.episode_number,
        scanlator=pydantic.scanlator,
        thumbnail=pydantic.thumbnail,
        filler=pydantic.filler,
    )


def to_domain_media(pydantic: infra.MediaResult) -> domain.Media:
    return domain.Media(
        title=pydantic.title,
        url=pydantic.url,
        cover=pydantic.cover,
        description=pydantic.description,
        author=pydantic.author,
        artist=pydantic.artist,
        status=pydantic.status,
        genres=list(pydantic.genres),
        episodes=[to_domain_episode(e) for e in pydantic.episodes],
    )


def to_domain_media_page(pydantic: infra.MediaPageResult) -> domain.MediaPage:
    return domain.MediaPage(
        items=[to_domain_media(m) for m in pydantic.items],
        has_next_page=pydantic.has_next_page,
    )


def to_domain_page_url(pydantic: infra.PageUrlResult) -> domain.PageUrl:
    return domain.PageUrl(url=pydantic.url, headers=pydantic.headers)


def to_domain_track(pydantic: infra.TrackResult) -> domain.Track:
    return domain.Track(file=pydantic.file, label=pydantic.label)


def to_domain_video(pydantic: infra.VideoResult) -> domain.Video:
    return domain.Video(
        url=pydantic.url,
        quality=pydantic.quality,
        original_url=pydantic.original_url,
        headers=pydantic.headers,
        subtitles=[to_domain_track(t) for t in pydantic.subtitles],
        audios=[to_domain_track(t) for t in pydantic.audios],
    )


def to_domain_preference(
    pydantic: infra.SourcePreferenceResult,
) -> domain.SourcePreference:
    return domain.SourcePreference(
        key=pydantic.key,
        type=pydantic.type,
        title=pydantic.title,
        summary=pydantic.summary,
        value=pydantic.value,
        entries=list(pydantic.entries),
        entry_values=list(pydantic.entry_values),
    )

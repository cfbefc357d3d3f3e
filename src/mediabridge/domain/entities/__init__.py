from .extension import (
    Episode,
    ExtensionSource,
    Media,
    MediaPage,
    PageUrl,
    SourcePreference,
    Track,
    Video,
)
from .extraction import (
    ExtractionRequest,
    ExtractorCategory,
    ExtractorInfo,
    MediaType,
    RawStream,
    SubtitleTrack,
)

__all__ = [
    "Episode",
    "ExtensionSource",
    "ExtractionRequest",
    "ExtractorCategory",
    "ExtractorInfo",
    "Media",
    "MediaPage",
    "MediaType",
    "PageUrl",
    "RawStream",
    "SourcePreference",
    "SubtitleTrack",
    "Track",
    "Video",
]

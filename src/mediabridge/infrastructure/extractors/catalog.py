"""Built-in extractor catalog.

Declaration order is resolution precedence: entries are matched and run
in this order.
"""

from __future__ import annotations

import httpx

from mediabridge.domain.entities.extraction import ExtractorInfo

from .filemoon import FilemoonExtractor
from .mixdrop import MixDropExtractor
from .mp4upload import Mp4UploadExtractor
from .streamtape import StreamTapeExtractor
from .streamwish import StreamWishExtractor


def build_default_video_extractors(
    http_client: httpx.AsyncClient,
) -> list[ExtractorInfo]:
    """Build the bundled video catalog on one shared HTTP client.

    The caller owns *http_client* and closes it.
    """
    return [
        StreamWishExtractor.catalog_entry(http_client),
        StreamTapeExtractor.catalog_entry(http_client),
        FilemoonExtractor.catalog_entry(http_client),
        MixDropExtractor.catalog_entry(http_client),
        Mp4UploadExtractor.catalog_entry(http_client),
    ]

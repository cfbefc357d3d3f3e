"""Dispatches extraction requests to every matching extractor."""

from __future__ import annotations

from urllib.parse import urlparse

import httpx
import structlog

from mediabridge.domain.entities.extraction import (
    ExtractionRequest,
    ExtractorCategory,
    ExtractorInfo,
    RawStream,
)
from mediabridge.domain.ports.stream_extractor import StreamExtractorPort

from .registry import ExtractorRegistry

log = structlog.get_logger(__name__)


def _host(url: str) -> str:
    try:
        return urlparse(url).hostname or ""
    except Exception:  # noqa: BLE001
        return ""


class ExtractionDispatcher:
    """Runs all extractors of all matching catalog entries.

    Every match is attempted, not just the first.  Ranking and
    de-duplication are left to the caller.
    """

    def __init__(self, registry: ExtractorRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> ExtractorRegistry:
        return self._registry

    def get_extractors(self, category: ExtractorCategory) -> tuple[ExtractorInfo, ...]:
        return self._registry.by_category(category)

    async def extract(self, request: ExtractionRequest) -> list[RawStream]:
        """Resolve *request* into raw streams; never raises.

        Entries and their extractors run in catalog order and the result
        list keeps that order.
        """
        matched = self._registry.match(request)
        if not matched:
            log.warning(
                "no_extractor_matched",
                host=_host(request.url),
                category=request.category.value,
            )
            return []

        results: list[RawStream] = []
        for info in matched:
            for extractor in info.extractors:
                streams = await self._safe_execute(extractor, request)
                if streams:
                    results.extend(streams)
        return results

    async def _safe_execute(
        self,
        extractor: StreamExtractorPort,
        request: ExtractionRequest,
    ) -> list[RawStream]:
        """Run one extractor, substituting an empty list for any failure.

        No retry: a failed extractor is not re-attempted within the same
        ``extract`` call.
        """
        try:
            log.debug("extractor_started", extractor=extractor.name, url=request.url)
            streams = await extractor.extract(request)
            log.debug(
                "extractor_finished",
                extractor=extractor.name,
                url=request.url,
                count=len(streams),
            )
            return list(streams)
        except httpx.TimeoutException:
            log.warning("extractor_timeout", extractor=extractor.name, url=request.url)
        except httpx.HTTPError as exc:
            log.warning(
                "extractor_http_error",
                extractor=extractor.name,
                url=request.url,
                error=str(exc),
            )
        except Exception:
            log.exception("extractor_failed", extractor=extractor.name, url=request.url)
        return []

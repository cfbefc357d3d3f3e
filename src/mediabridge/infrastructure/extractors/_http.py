"""HTTP helpers shared by the built-in extractors."""

from __future__ import annotations

from urllib.parse import urlparse

import httpx

from mediabridge.domain.entities.extraction import ExtractionRequest

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)

DEFAULT_TIMEOUT = 15.0


def origin(url: str) -> str:
    """Return ``scheme://host[:port]`` of *url*."""
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def request_headers(
    request: ExtractionRequest, extra: dict[str, str] | None = None
) -> dict[str, str]:
    """Build per-request headers: extractor extras < request context.

    The User-Agent comes from the client's own default headers.
    """
    headers = dict(extra or {})
    if request.referer:
        headers["Referer"] = request.referer
    headers.update(request.headers or {})
    return headers


def default_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    """Create the client used when no shared client is injected."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        headers={"User-Agent": DEFAULT_USER_AGENT},
        follow_redirects=True,
    )

"""Embed URL extractors and their dispatch machinery."""

from __future__ import annotations

from .catalog import build_default_video_extractors
from .dispatcher import ExtractionDispatcher
from .registry import ExtractorRegistry

__all__ = [
    "ExtractionDispatcher",
    "ExtractorRegistry",
    "build_default_video_extractors",
]

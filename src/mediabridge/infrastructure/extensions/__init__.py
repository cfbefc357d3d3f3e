"""Extension loading, script runtime and the typed source bridge."""

from __future__ import annotations

from .loader import load_extension_manifest
from .playwright_engine import PlaywrightScriptEngine
from .runtime import ContextState, ScriptRuntime
from .shared_browser import SharedBrowserPool
from .source_methods import ExtensionSourceMethods
from .store import ExtensionStore

__all__ = [
    "ContextState",
    "ExtensionSourceMethods",
    "ExtensionStore",
    "PlaywrightScriptEngine",
    "ScriptRuntime",
    "SharedBrowserPool",
    "load_extension_manifest",
]

from .extension_store import ExtensionStorePort
from .script_engine import ScriptContextPort, ScriptEnginePort, ScriptRuntimePort
from .stream_extractor import StreamExtractorPort

__all__ = [
    "ExtensionStorePort",
    "ScriptContextPort",
    "ScriptEnginePort",
    "ScriptRuntimePort",
    "StreamExtractorPort",
]

from .exceptions import (
    DuplicateExtensionError,
    DuplicateExtractorError,
    ExtensionError,
    ExtensionLoadError,
    ExtensionNotFoundError,
    ExtensionValidationError,
    ExtractorError,
    MissingExtensionIdError,
    ScriptExecutionError,
)

__all__ = [
    "DuplicateExtensionError",
    "DuplicateExtractorError",
    "ExtensionError",
    "ExtensionLoadError",
    "ExtensionNotFoundError",
    "ExtensionValidationError",
    "ExtractorError",
    "MissingExtensionIdError",
    "ScriptExecutionError",
]

"""Extension and extractor exceptions."""

from __future__ import annotations


class ExtensionError(Exception):
    """Base class for all extension-related errors."""


class ExtensionNotFoundError(ExtensionError):
    """Raised when no extension is registered under the requested id."""

    def __init__(self, extension_id: str) -> None:
        super().__init__(f"Extension '{extension_id}' not found")
        self.extension_id = extension_id


class ScriptExecutionError(ExtensionError):
    """Raised when an extension script throws during a function call."""

    def __init__(
        self,
        extension_id: str,
        function: str,
        message: str,
        script_stack: str | None = None,
    ) -> None:
        super().__init__(f"{extension_id}.{function}() failed: {message}")
        self.extension_id = extension_id
        self.function = function
        self.message = message
        self.script_stack = script_stack


class MissingExtensionIdError(ExtensionError, RuntimeError):
    """Raised when a bound extension has no usable id.

    This is a programming error on the caller side, not a script failure.
    """


class ExtensionLoadError(ExtensionError):
    """Raised when an extension manifest or script cannot be read."""


class ExtensionValidationError(ExtensionError):
    """Raised when an extension manifest fails schema validation."""


class DuplicateExtensionError(ExtensionError):
    """Raised when two manifests declare the same extension id."""


class ExtractorError(Exception):
    """Base class for extractor catalog errors."""


class DuplicateExtractorError(ExtractorError):
    """Raised when two catalog entries share an id."""

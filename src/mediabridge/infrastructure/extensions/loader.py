from __future__ import annotations

from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from mediabridge.domain.entities.extension import ExtensionSource
from mediabridge.domain.extensions import ExtensionLoadError, ExtensionValidationError
from mediabridge.infrastructure.extensions.adapters import to_domain_source
from mediabridge.infrastructure.extensions.validation_schema import ExtensionManifest

log = structlog.get_logger(__name__)


def load_extension_manifest(path: Path) -> ExtensionSource:
    """Load and validate a YAML extension manifest, returning domain model.

    The JS source is either inlined under ``source`` or read from the
    ``script`` file, resolved relative to the manifest.
    """
    try:
        raw = path.read_text(encoding="utf-8")
        data = yaml.safe_load(raw)
        if data is None:
            raise ExtensionValidationError("YAML file is empty")
        if not isinstance(data, dict):
            raise ExtensionValidationError("YAML root must be a mapping/object")

        manifest = ExtensionManifest.model_validate(data)

        if manifest.source:
            source_code = manifest.source
        else:
            assert manifest.script is not None
            source_code = (path.parent / manifest.script).read_text(encoding="utf-8")

        return to_domain_source(manifest, source_code)
    except (OSError, UnicodeDecodeError) as e:
        log.error(
            "extension_load_failed",
            manifest_file=str(path),
            error_type=type(e).__name__,
            error_message=str(e),
        )
        raise ExtensionLoadError(str(e)) from e
    except ValidationError as e:
        log.error(
            "extension_validation_failed",
            manifest_file=str(path),
            error_type="ValidationError",
            error_details=e.errors(),
        )
        raise ExtensionValidationError(str(e)) from e
    except yaml.YAMLError as e:
        log.error(
            "extension_validation_failed",
            manifest_file=str(path),
            error_type=type(e).__name__,
            error_message=str(e),
        )
        raise ExtensionValidationError(str(e)) from e

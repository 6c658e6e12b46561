"""Properties Loader — reads a workflow's *.properties.json file."""

import json
from pathlib import Path

import pydantic

from workflow_catalog.errors import ManifestParseError
from workflow_catalog.models import PropertiesRecord


def load_properties(path: Path) -> PropertiesRecord:
    """
    Load a properties file. Read fresh on every call.

    Raises:
        ManifestParseError: If the file is unreadable, not valid JSON, or
            does not match the PropertiesRecord schema.
    """
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ManifestParseError(f"Failed to read properties file {path}: {exc}", path=path) from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ManifestParseError(
            f"Properties file {path} is not valid JSON: {exc}", path=path
        ) from exc

    if not isinstance(raw, dict):
        raise ManifestParseError(
            f"Properties file {path} must be a JSON object, got {type(raw).__name__}.",
            path=path,
        )

    try:
        return PropertiesRecord.model_validate(raw)
    except pydantic.ValidationError as exc:
        raise ManifestParseError(f"Invalid properties file {path}: {exc}", path=path) from exc

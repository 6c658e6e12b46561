"""
Manifest Store — Reads and writes workflow.config.json.

The manifest maps workflow IDs to WorkflowRecords. Writes are stable:
keys sorted, record fields in a fixed order, two-space indentation and a
trailing newline, so regenerating an unchanged manifest yields no diff.
"""

import json
from pathlib import Path

import pydantic
import structlog

from workflow_catalog.errors import CatalogWriteError, ManifestParseError
from workflow_catalog.models import WorkflowManifest

logger = structlog.get_logger(__name__)


def load_manifest(path: Path) -> WorkflowManifest:
    """
    Load and validate the workflow manifest.

    Args:
        path: Location of workflow.config.json.

    Returns:
        The parsed WorkflowManifest.

    Raises:
        ManifestParseError: If the file is missing, is not valid JSON, or is
            not an object of workflow records.
    """
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ManifestParseError(f"Manifest not found at {path}", path=path) from exc
    except OSError as exc:
        raise ManifestParseError(f"Failed to read manifest {path}: {exc}", path=path) from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ManifestParseError(f"Manifest {path} is not valid JSON: {exc}", path=path) from exc

    if not isinstance(raw, dict):
        raise ManifestParseError(
            f"Manifest {path} must be a JSON object, got {type(raw).__name__}.",
            path=path,
        )

    try:
        manifest = WorkflowManifest.model_validate(raw)
    except pydantic.ValidationError as exc:
        raise ManifestParseError(
            f"Manifest {path} has invalid workflow records: {exc}", path=path
        ) from exc

    logger.debug("manifest_loaded", path=str(path), workflows=len(manifest))
    return manifest


def dump_manifest(manifest: WorkflowManifest) -> str:
    """Serialize the manifest exactly as it is written to disk."""
    data = {
        workflow_id: manifest[workflow_id].model_dump(mode="json", by_alias=True)
        for workflow_id in manifest.sorted_ids()
    }
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def save_manifest(manifest: WorkflowManifest, path: Path) -> None:
    """
    Replace the manifest file with the given manifest.

    Raises:
        CatalogWriteError: If the file cannot be written.
    """
    content = dump_manifest(manifest)
    try:
        Path(path).write_text(content, encoding="utf-8")
    except OSError as exc:
        raise CatalogWriteError(f"Failed to write manifest {path}: {exc}", path=path) from exc

    logger.info("manifest_saved", path=str(path), workflows=len(manifest))

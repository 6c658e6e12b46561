"""
Release — Promotes starter workflows into a starter-workflows checkout.

For every record flagged ``starter``:

    <src>/workflows/deploy-cloudrun/cloudrun-docker.yml
        -> <dest>/deployments/google-cloudrun-docker.yml
    <src>/properties/cloudrun-docker.properties.json
        -> <dest>/deployments/properties/google-cloudrun-docker.properties.json

All starter records are validated before anything is copied. Existing
destination files are replaced.
"""

from __future__ import annotations

import os
import posixpath
import shutil
from pathlib import Path

import structlog

from workflow_catalog.config import CatalogSettings
from workflow_catalog.errors import CatalogWriteError, PathCollisionError
from workflow_catalog.manifest import load_manifest
from workflow_catalog.models import FileCopy, WorkflowManifest
from workflow_catalog.validator import validate_manifest

logger = structlog.get_logger(__name__)

OUTPUT_FILE_PREFIX = "google"
OUTPUT_PROPERTIES_DIR = "properties"


def _dest_name(rel_path: str) -> str:
    return f"{OUTPUT_FILE_PREFIX}-{posixpath.basename(rel_path)}"


def plan_release(
    manifest: WorkflowManifest, source_root: Path, dest_root: Path
) -> list[FileCopy]:
    """
    Compute the copies for every starter workflow.

    Raises:
        ManifestValidationError: If any starter record references a missing
            file, or two starters would be copied to the same destination.
            Raised after every starter record was checked.
    """
    starters = manifest.starters()

    report = validate_manifest(
        manifest, source_root, workflow_ids=[workflow_id for workflow_id, _ in starters]
    )

    copies = []
    claimed: dict[Path, str] = {}
    for workflow_id, record in starters:
        category_dir = Path(dest_root) / record.category.value
        planned = [
            FileCopy(
                source=Path(source_root) / record.workflow_path,
                dest=category_dir / _dest_name(record.workflow_path),
            ),
            FileCopy(
                source=Path(source_root) / record.properties_path,
                dest=category_dir / OUTPUT_PROPERTIES_DIR / _dest_name(record.properties_path),
            ),
        ]
        for file_copy in planned:
            owner = claimed.setdefault(file_copy.dest, workflow_id)
            if owner != workflow_id:
                report.add(
                    [
                        PathCollisionError(
                            f"workflows {owner} and {workflow_id} both release to {file_copy.dest}",
                            path=file_copy.dest,
                        )
                    ]
                )
        copies.extend(planned)

    report.raise_for_problems("release")
    return copies


def promote(
    manifest: WorkflowManifest,
    source_root: Path,
    dest_root: Path,
    *,
    link: bool = False,
) -> list[FileCopy]:
    """
    Copy every starter workflow and its properties into `dest_root`.

    Args:
        manifest: The workflow manifest.
        source_root: Repository root the manifest paths are relative to.
        dest_root: Root of the starter-workflows checkout.
        link: Hard-link instead of copying. Source and destination must be
            on the same filesystem.

    Returns:
        The copies performed, in workflow ID order.

    Raises:
        ManifestValidationError: If any starter record is invalid (nothing
            is copied).
        CatalogWriteError: On the first failed copy.
    """
    copies = plan_release(manifest, source_root, dest_root)

    for file_copy in copies:
        try:
            file_copy.dest.parent.mkdir(parents=True, exist_ok=True)
            file_copy.dest.unlink(missing_ok=True)
            if link:
                os.link(file_copy.source, file_copy.dest)
            else:
                shutil.copyfile(file_copy.source, file_copy.dest)
        except OSError as exc:
            raise CatalogWriteError(
                f"failed to copy {file_copy.source} -> {file_copy.dest}: {exc}",
                path=file_copy.dest,
            ) from exc

        logger.info(
            "release_file_copied",
            source=str(file_copy.source),
            dest=str(file_copy.dest),
            mode="link" if link else "copy",
        )

    logger.info("release_complete", files=len(copies), dest=str(dest_root))
    return copies


def release(settings: CatalogSettings, *, link: bool = False) -> list[FileCopy]:
    """Promote starter workflows from the configured repo to OUTPUT_PATH."""
    manifest = load_manifest(settings.manifest_file)
    return promote(manifest, settings.root_dir, settings.release_output_path, link=link)

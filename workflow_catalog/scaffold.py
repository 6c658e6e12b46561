"""
Scaffolder — Bootstraps a new example workflow and registers it.

Given ``deploy-cloudrun/cloudrun-docker`` it creates:

    workflows/
      deploy-cloudrun/
        README.md                  # "# deploy-cloudrun examples", only if absent
        cloudrun-docker.yml        # placeholder workflow
    properties/
      cloudrun-docker.properties.json   # rendered from the properties template

and adds a ``cloudrun-docker`` entry to workflow.config.json.

All conflict checks run before the first write. The writes themselves are
not transactional: if one fails midway, the files already written stay on
disk and a rerun stops at the collision check until they are removed.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from workflow_catalog.config import CatalogSettings
from workflow_catalog.errors import (
    CatalogWriteError,
    DuplicateIDError,
    InvalidPathError,
    PathCollisionError,
)
from workflow_catalog.grouping import derive_action
from workflow_catalog.manifest import load_manifest, save_manifest
from workflow_catalog.models import (
    PropertiesStubContext,
    ScaffoldResult,
    WorkflowCategory,
    WorkflowRecord,
)
from workflow_catalog.renderer import TemplateRenderer

logger = structlog.get_logger(__name__)

WORKFLOW_PLACEHOLDER = "# TODO: Add meaningful workflow content here.\n"


def split_workflow_arg(workflow_arg: str) -> tuple[str, list[str]]:
    """
    Split ``action-name[/sub-dir...]/workflow-id`` into ID and directories.

    Raises:
        InvalidPathError: If there is no directory segment, or any segment
            is empty, ``.`` or ``..``.
    """
    parts = workflow_arg.split("/")

    if len(parts) < 2:
        raise InvalidPathError(
            f"invalid workflow path {workflow_arg}, path should have at least 2 folders, "
            f"e.g. action-name/workflow-name",
            path=workflow_arg,
        )

    if any(part in ("", ".", "..") for part in parts):
        raise InvalidPathError(
            f"invalid workflow path {workflow_arg}, segments must not be empty, '.' or '..'",
            path=workflow_arg,
        )

    return parts[-1], parts[:-1]


def create_workflow(
    settings: CatalogSettings,
    workflow_arg: str,
    *,
    starter: bool = False,
    category: WorkflowCategory = WorkflowCategory.DEPLOYMENTS,
) -> ScaffoldResult:
    """
    Scaffold a new workflow and add it to the manifest.

    Args:
        settings: Catalog settings (paths are resolved against root_dir).
        workflow_arg: Slash-separated ``action-name/.../workflow-id``.
        starter: Mark the workflow for promotion to starter-workflows.
        category: Starter workflow category.

    Raises:
        InvalidPathError: If workflow_arg is malformed.
        ManifestParseError: If the manifest cannot be loaded.
        DuplicateIDError: If the workflow ID is already in the manifest.
        PathCollisionError: If the workflow or properties file already exists.
        TemplateRenderError: If the properties stub cannot be rendered.
        CatalogWriteError: If a directory or file cannot be written.
    """
    workflow_id, dir_parts = split_workflow_arg(workflow_arg)

    workflow_rel = "/".join([settings.workflows_root, *dir_parts, f"{workflow_id}.yml"])
    properties_rel = f"{settings.properties_dir}/{workflow_id}.properties.json"
    action = derive_action(workflow_rel, workflow_id=workflow_id)

    workflow_file = settings.resolve(workflow_rel)
    properties_file = settings.resolve(properties_rel)
    readme_file = settings.resolve(action.readme_path)

    # ── Checks (no writes yet) ──────────────────────────────────────
    manifest = load_manifest(settings.manifest_file)

    if workflow_id in manifest:
        raise DuplicateIDError(
            f"workflow {workflow_id} exists in {settings.manifest_path}, "
            f"please use existing workflow or use a different name",
            workflow_id=workflow_id,
        )

    if workflow_file.exists():
        raise PathCollisionError(f"workflow file {workflow_rel} already exists", path=workflow_rel)

    if properties_file.exists():
        raise PathCollisionError(
            f"properties file {properties_rel} already exists", path=properties_rel
        )

    renderer = TemplateRenderer(settings.templates_path)
    properties_content = renderer.render(
        settings.properties_template, PropertiesStubContext(workflow_id=workflow_id)
    )

    # ── Writes ──────────────────────────────────────────────────────
    _mkdir(workflow_file.parent)

    readme_created = False
    if not readme_file.exists():
        _write(readme_file, f"# {action.name} examples\n")
        readme_created = True

    _write(workflow_file, WORKFLOW_PLACEHOLDER)

    _mkdir(properties_file.parent)
    _write(properties_file, properties_content)

    record = WorkflowRecord(
        starter=starter,
        category=category,
        workflow_path=workflow_rel,
        properties_path=properties_rel,
    )
    manifest.add(workflow_id, record)
    save_manifest(manifest, settings.manifest_file)

    logger.info(
        "workflow_scaffolded",
        workflow_id=workflow_id,
        action=action.name,
        starter=starter,
        category=category.value,
        readme_created=readme_created,
    )

    return ScaffoldResult(
        workflow_id=workflow_id,
        record=record,
        workflow_path=workflow_file,
        properties_path=properties_file,
        readme_path=readme_file,
        readme_created=readme_created,
    )


def _mkdir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise CatalogWriteError(f"failed to create directory {path}: {exc}", path=path) from exc


def _write(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise CatalogWriteError(f"failed writing content to {path}: {exc}", path=path) from exc

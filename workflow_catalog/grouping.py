"""
Grouper/Sorter — Groups manifest records by owning action.

The action is the second segment of a workflow path:

    workflows/deploy-cloudrun/cloudrun-docker.yml
              ^^^^^^^^^^^^^^^
Output order is fully determined by the manifest content: records are
visited in sorted workflow ID order, and groups are sorted by action name.
The generated README is checked in and diffed in CI, so this matters.
"""

from __future__ import annotations

import posixpath
from collections.abc import Mapping

from workflow_catalog.errors import InvalidPathError
from workflow_catalog.models import (
    ActionGroup,
    ActionLocation,
    PropertiesRecord,
    ReadmeWorkflow,
    WorkflowManifest,
)

# root / action / file
MIN_WORKFLOW_PATH_SEGMENTS = 3

ACTION_README_NAME = "README.md"


def derive_action(workflow_path: str, *, workflow_id: str = "") -> ActionLocation:
    """
    Derive the owning action of a workflow from its path.

    Args:
        workflow_path: Repository-relative POSIX path, at least
            ``<root>/<action>/<file>``; deeper nesting is allowed.
        workflow_id: Only used to give errors context.

    Raises:
        InvalidPathError: If the path has fewer than three segments or
            contains empty, ``.`` or ``..`` segments.
    """
    parts = workflow_path.split("/")

    if len(parts) < MIN_WORKFLOW_PATH_SEGMENTS:
        raise InvalidPathError(
            f"invalid workflow path {workflow_path}, "
            f"should be at least workflows/action-name/workflow-name.yml",
            path=workflow_path,
            workflow_id=workflow_id,
        )

    if any(part in ("", ".", "..") for part in parts):
        raise InvalidPathError(
            f"invalid workflow path {workflow_path}, "
            f"segments must not be empty, '.' or '..'",
            path=workflow_path,
            workflow_id=workflow_id,
        )

    action_path = "/".join(parts[:2])
    sub_path = "/".join(parts[2:])

    return ActionLocation(
        name=parts[1],
        path=action_path,
        readme_path=f"{action_path}/{ACTION_README_NAME}",
        relative_name=posixpath.splitext(sub_path)[0],
    )


def derive_action_name(workflow_path: str) -> str:
    """Action name for a workflow path. Raises InvalidPathError."""
    return derive_action(workflow_path).name


def group_workflows(
    manifest: WorkflowManifest,
    properties: Mapping[str, PropertiesRecord],
) -> list[ActionGroup]:
    """
    Group manifest records into ActionGroups.

    Args:
        manifest: The workflow manifest.
        properties: Loaded properties, keyed by workflow ID. Every manifest
            ID must be present.

    Returns:
        ActionGroups sorted by name, each holding its workflows in
        workflow ID order.

    Raises:
        InvalidPathError: On the first record whose path has no action.
    """
    groups: dict[str, ActionGroup] = {}

    for workflow_id in manifest.sorted_ids():
        record = manifest[workflow_id]
        location = derive_action(record.workflow_path, workflow_id=workflow_id)
        props = properties[workflow_id]

        group = groups.get(location.name)
        if group is None:
            group = ActionGroup(
                name=location.name,
                path=location.path,
                readme_path=location.readme_path,
            )
            groups[location.name] = group

        group.workflows.append(
            ReadmeWorkflow(
                id=workflow_id,
                name=props.name,
                relative_name=location.relative_name,
                description=props.description,
                starter=record.starter,
                workflow_path=record.workflow_path,
                properties_path=record.properties_path,
            )
        )

    return [groups[name] for name in sorted(groups)]

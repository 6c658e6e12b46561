"""
Validator — Confirms every file a manifest record references exists.

Problems are collected across all records and only then turned into a
single ManifestValidationError, so one run reports every broken record
in the manifest instead of one per invocation.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

from workflow_catalog.errors import (
    CatalogError,
    InvalidPathError,
    ManifestValidationError,
    MissingFileError,
)
from workflow_catalog.grouping import derive_action
from workflow_catalog.models import WorkflowManifest, WorkflowRecord

logger = structlog.get_logger(__name__)


def validate_record(
    workflow_id: str,
    record: WorkflowRecord,
    root: Path,
    *,
    readme_path: str | None = None,
) -> list[MissingFileError]:
    """
    Check the files referenced by one record.

    Args:
        workflow_id: Manifest key of the record.
        record: The record to check.
        root: Repository root the record's paths are relative to.
        readme_path: Action README to require as well. Only passed when
            generating the index README.

    Returns:
        One MissingFileError per path that is missing or is not a regular
        file, empty if all exist.
    """
    checks = [
        ("workflow", record.workflow_path),
        ("properties", record.properties_path),
    ]
    if readme_path is not None:
        checks.append(("readme", readme_path))

    errors = []
    for kind, rel_path in checks:
        target = root / rel_path
        if target.is_file():
            continue
        reason = "is not a file" if target.exists() else "does not exist"
        errors.append(
            MissingFileError(
                f"{kind} file {reason} for workflow {workflow_id}: path - {rel_path}",
                workflow_id=workflow_id,
                path=rel_path,
                kind=kind,
            )
        )
    return errors


class ValidationReport:
    """Accumulates validation problems across records."""

    def __init__(self) -> None:
        self.problems: list[CatalogError] = []

    def add(self, problems: Iterable[CatalogError]) -> None:
        self.problems.extend(problems)

    @property
    def ok(self) -> bool:
        return not self.problems

    def raise_for_problems(self, action: str) -> None:
        """
        Log every collected problem, then fail once if there were any.

        Raises:
            ManifestValidationError: Carrying all collected problems.
        """
        if self.ok:
            return

        for problem in self.problems:
            logger.error("workflow_invalid", action=action, **problem.to_dict())

        raise ManifestValidationError(
            f"failed to process invalid configs: {len(self.problems)} problem(s) found during {action}",
            problems=list(self.problems),
        )


def validate_manifest(
    manifest: WorkflowManifest,
    root: Path,
    *,
    workflow_ids: Iterable[str] | None = None,
    check_readme: bool = False,
) -> ValidationReport:
    """
    Validate records of a manifest, never stopping at the first failure.

    Args:
        manifest: The manifest to check.
        root: Repository root.
        workflow_ids: Subset to check; defaults to every record.
        check_readme: Also require the action README and a derivable
            action (README generation).

    Returns:
        A ValidationReport; call ``raise_for_problems`` to fail on it.
    """
    report = ValidationReport()
    ids = manifest.sorted_ids() if workflow_ids is None else sorted(workflow_ids)

    for workflow_id in ids:
        record = manifest[workflow_id]
        readme_path = None

        if check_readme:
            try:
                readme_path = derive_action(record.workflow_path, workflow_id=workflow_id).readme_path
            except InvalidPathError as exc:
                report.add([exc])

        report.add(validate_record(workflow_id, record, root, readme_path=readme_path))

    return report

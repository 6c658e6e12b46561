"""
Catalog Models — Shared Pydantic models for the workflow catalog tooling.

Defines the data structures used across all commands:
  - WorkflowRecord: One manifest entry (workflow.config.json)
  - WorkflowManifest: The whole manifest, keyed by workflow ID
  - PropertiesRecord: Per-workflow *.properties.json metadata
  - ActionLocation / ActionGroup / ReadmeWorkflow: Derived README data
  - ReadmeContext / PropertiesStubContext: Template contexts
  - FileCopy / ScaffoldResult: Command results
"""

from __future__ import annotations

import enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, RootModel


# ── Manifest ─────────────────────────────────────────────────────────


class WorkflowCategory(str, enum.Enum):
    """Starter workflow categories (directory names in starter-workflows)."""

    AUTOMATION = "automation"
    CI = "ci"
    CODE_SCANNING = "code-scanning"
    DEPLOYMENTS = "deployments"


class WorkflowRecord(BaseModel):
    """A single workflow entry in workflow.config.json."""

    model_config = ConfigDict(populate_by_name=True)

    starter: bool = False
    category: WorkflowCategory = Field(default=WorkflowCategory.DEPLOYMENTS, alias="type")
    workflow_path: str = Field(alias="workflowPath")
    properties_path: str = Field(alias="propertiesPath")


class WorkflowManifest(RootModel[dict[str, WorkflowRecord]]):
    """
    Mapping of workflow ID to WorkflowRecord.

    Iteration order of the underlying dict carries no meaning; anything
    that produces output must go through `sorted_ids()`.
    """

    root: dict[str, WorkflowRecord] = Field(default_factory=dict)

    def __contains__(self, workflow_id: object) -> bool:
        return workflow_id in self.root

    def __getitem__(self, workflow_id: str) -> WorkflowRecord:
        return self.root[workflow_id]

    def __len__(self) -> int:
        return len(self.root)

    def sorted_ids(self) -> list[str]:
        """Workflow IDs in ascending code-point order."""
        return sorted(self.root)

    def add(self, workflow_id: str, record: WorkflowRecord) -> None:
        self.root[workflow_id] = record

    def starters(self) -> list[tuple[str, WorkflowRecord]]:
        """Starter records, sorted by workflow ID."""
        return [(wid, self.root[wid]) for wid in self.sorted_ids() if self.root[wid].starter]


# ── Properties ───────────────────────────────────────────────────────


class PropertiesRecord(BaseModel):
    """Contents of a *.properties.json file."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str = ""
    creator: str = ""
    icon_name: str = Field(default="", alias="iconName")
    categories: list[str] = Field(default_factory=list)


# ── README generation ────────────────────────────────────────────────


class ActionLocation(BaseModel):
    """Where a workflow's owning action lives, derived from its path."""

    name: str  # e.g. "deploy-cloudrun"
    path: str  # e.g. "workflows/deploy-cloudrun"
    readme_path: str  # e.g. "workflows/deploy-cloudrun/README.md"
    relative_name: str  # workflow path below the action dir, extension stripped


class ReadmeWorkflow(BaseModel):
    """One row of an action's table in the index README."""

    id: str
    name: str
    relative_name: str
    description: str = ""
    starter: bool = False
    workflow_path: str
    properties_path: str


class ActionGroup(BaseModel):
    """All workflows sharing an owning action, in workflow ID order."""

    name: str
    path: str
    readme_path: str
    workflows: list[ReadmeWorkflow] = Field(default_factory=list)


class ReadmeContext(BaseModel):
    """Template context for README.tmpl.md."""

    title: str
    actions: list[ActionGroup] = Field(default_factory=list)


class PropertiesStubContext(BaseModel):
    """Template context for workflow.properties.tmpl.json."""

    workflow_id: str


# ── Command results ──────────────────────────────────────────────────


class FileCopy(BaseModel):
    """A single source → destination copy planned by a release."""

    source: Path
    dest: Path


class ScaffoldResult(BaseModel):
    """Files produced by scaffolding a new workflow."""

    workflow_id: str
    record: WorkflowRecord
    workflow_path: Path
    properties_path: Path
    readme_path: Path
    readme_created: bool = False

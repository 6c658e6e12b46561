"""
Workflow Catalog — Tooling for the example workflows repository.

Scaffolds new example workflows, validates workflow.config.json, renders
the index README, and promotes starter workflows into a
starter-workflows checkout.
"""

from workflow_catalog.config import CatalogSettings, get_settings
from workflow_catalog.grouping import derive_action, derive_action_name, group_workflows
from workflow_catalog.manifest import load_manifest, save_manifest
from workflow_catalog.models import (
    ActionGroup,
    PropertiesRecord,
    WorkflowCategory,
    WorkflowManifest,
    WorkflowRecord,
)
from workflow_catalog.properties import load_properties
from workflow_catalog.readme import check_readme, generate_readme
from workflow_catalog.release import plan_release, promote, release
from workflow_catalog.renderer import TemplateRenderer
from workflow_catalog.scaffold import create_workflow
from workflow_catalog.validator import ValidationReport, validate_manifest, validate_record

__all__ = [
    # Configuration
    "CatalogSettings",
    "get_settings",
    # Models
    "ActionGroup",
    "PropertiesRecord",
    "WorkflowCategory",
    "WorkflowManifest",
    "WorkflowRecord",
    # Manifest & properties
    "load_manifest",
    "save_manifest",
    "load_properties",
    # Validation & grouping
    "ValidationReport",
    "validate_manifest",
    "validate_record",
    "derive_action",
    "derive_action_name",
    "group_workflows",
    # Rendering
    "TemplateRenderer",
    "generate_readme",
    "check_readme",
    # Scaffolding
    "create_workflow",
    # Release
    "plan_release",
    "promote",
    "release",
]

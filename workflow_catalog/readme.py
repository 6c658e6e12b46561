"""
README Generation — Validate the manifest, group by action, render the index.

Pipeline:
  1. Load workflow.config.json
  2. Validate every record (files + action README), collecting problems
  3. Load each record's properties
  4. Group by action, sorted
  5. Render templates/README.tmpl.md

Step 2 fails only after every record was checked, and nothing is
written when it does.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from workflow_catalog.config import CatalogSettings
from workflow_catalog.grouping import group_workflows
from workflow_catalog.manifest import load_manifest
from workflow_catalog.models import ActionGroup, ReadmeContext
from workflow_catalog.properties import load_properties
from workflow_catalog.renderer import TemplateRenderer
from workflow_catalog.validator import validate_manifest

logger = structlog.get_logger(__name__)

README_TITLE = "Google GitHub Actions - Example Workflows"


def collect_readme_actions(settings: CatalogSettings) -> list[ActionGroup]:
    """
    Build the sorted ActionGroups for the index README.

    Raises:
        ManifestParseError: Manifest or a properties file is malformed.
        ManifestValidationError: Any record is missing a file or has a
            path without an action.
    """
    manifest = load_manifest(settings.manifest_file)

    report = validate_manifest(manifest, settings.root_dir, check_readme=True)
    report.raise_for_problems("generate readme")

    properties = {
        workflow_id: load_properties(settings.resolve(manifest[workflow_id].properties_path))
        for workflow_id in manifest.sorted_ids()
    }
    return group_workflows(manifest, properties)


def render_readme(settings: CatalogSettings) -> str:
    """Render the index README in memory."""
    context = ReadmeContext(title=README_TITLE, actions=collect_readme_actions(settings))
    return TemplateRenderer(settings.templates_path).render(settings.readme_template, context)


def generate_readme(settings: CatalogSettings) -> Path:
    """
    Regenerate the index README at the configured output path.

    Returns:
        The path written.
    """
    context = ReadmeContext(title=README_TITLE, actions=collect_readme_actions(settings))
    renderer = TemplateRenderer(settings.templates_path)
    dest = renderer.render_to_file(settings.readme_template, settings.readme_output_path, context)

    logger.info(
        "readme_generated",
        path=str(dest),
        actions=len(context.actions),
        workflows=sum(len(a.workflows) for a in context.actions),
    )
    return dest


def check_readme(settings: CatalogSettings) -> bool:
    """
    Check that the README on disk matches what would be generated.

    Returns:
        True if up to date, False if stale or missing.
    """
    expected = render_readme(settings)
    dest = settings.readme_output_path

    if not dest.exists():
        logger.warning("readme_missing", path=str(dest))
        return False

    if dest.read_text(encoding="utf-8") != expected:
        logger.warning("readme_stale", path=str(dest))
        return False

    logger.info("readme_up_to_date", path=str(dest))
    return True

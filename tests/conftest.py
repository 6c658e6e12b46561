import json
import shutil
from pathlib import Path

import pytest
import structlog

from workflow_catalog.config import CatalogSettings, get_settings

REPO_ROOT = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = REPO_ROOT / "templates"


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep OUTPUT_PATH, cached settings and structlog config from leaking between tests."""
    monkeypatch.delenv("OUTPUT_PATH", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def catalog_root(tmp_path) -> Path:
    """A miniature catalog: real templates and an empty manifest."""
    root = tmp_path / "example-workflows"
    root.mkdir()
    shutil.copytree(TEMPLATES_DIR, root / "templates")
    (root / "workflow.config.json").write_text("{}\n")
    return root


@pytest.fixture
def settings(catalog_root) -> CatalogSettings:
    return CatalogSettings(root_dir=catalog_root)


@pytest.fixture
def add_workflow(catalog_root):
    """
    Add a fully valid workflow to the catalog (files + manifest entry).

    Usage:
        add_workflow("cloudrun-docker", "deploy-cloudrun", starter=True)
    """

    def _add(
        workflow_id: str,
        action: str,
        *,
        starter: bool = False,
        category: str = "deployments",
        name: str | None = None,
        description: str = "",
        with_readme: bool = True,
    ) -> dict:
        workflow_rel = f"workflows/{action}/{workflow_id}.yml"
        properties_rel = f"properties/{workflow_id}.properties.json"

        workflow_file = catalog_root / workflow_rel
        workflow_file.parent.mkdir(parents=True, exist_ok=True)
        workflow_file.write_text(f"name: '{workflow_id}'\n")

        if with_readme:
            (catalog_root / "workflows" / action / "README.md").write_text(f"# {action} examples\n")

        properties_file = catalog_root / properties_rel
        properties_file.parent.mkdir(parents=True, exist_ok=True)
        properties_file.write_text(
            json.dumps(
                {
                    "name": name or workflow_id,
                    "description": description,
                    "creator": "Google",
                    "iconName": "google",
                    "categories": [],
                }
            )
        )

        entry = {
            "starter": starter,
            "type": category,
            "workflowPath": workflow_rel,
            "propertiesPath": properties_rel,
        }
        manifest_file = catalog_root / "workflow.config.json"
        manifest = json.loads(manifest_file.read_text())
        manifest[workflow_id] = entry
        manifest_file.write_text(json.dumps(manifest, indent=2))
        return entry

    return _add


def snapshot_tree(root: Path) -> dict[str, bytes]:
    """Every file and directory under root, for asserting "nothing was written"."""
    return {
        str(p.relative_to(root)): p.read_bytes() if p.is_file() else b"<dir>"
        for p in sorted(root.rglob("*"))
    }


@pytest.fixture
def tree_snapshot():
    return snapshot_tree

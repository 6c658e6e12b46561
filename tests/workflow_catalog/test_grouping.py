"""Tests for workflow_catalog.grouping — action derivation and deterministic grouping."""

import pytest

from workflow_catalog.errors import InvalidPathError
from workflow_catalog.grouping import derive_action, derive_action_name, group_workflows
from workflow_catalog.models import PropertiesRecord, WorkflowManifest, WorkflowRecord


def _manifest(entries: dict[str, tuple[str, bool]]) -> WorkflowManifest:
    manifest = WorkflowManifest()
    for workflow_id, (workflow_path, starter) in entries.items():
        manifest.add(
            workflow_id,
            WorkflowRecord(
                starter=starter,
                workflow_path=workflow_path,
                properties_path=f"properties/{workflow_id}.properties.json",
            ),
        )
    return manifest


def _properties(manifest: WorkflowManifest) -> dict[str, PropertiesRecord]:
    return {
        workflow_id: PropertiesRecord(name=f"Name of {workflow_id}", description=f"About {workflow_id}")
        for workflow_id in manifest.sorted_ids()
    }


class TestDeriveAction:
    def test_simple_path(self):
        location = derive_action("workflows/deploy-cloudrun/cloudrun-docker.yml")

        assert location.name == "deploy-cloudrun"
        assert location.path == "workflows/deploy-cloudrun"
        assert location.readme_path == "workflows/deploy-cloudrun/README.md"
        assert location.relative_name == "cloudrun-docker"

    def test_nested_path(self):
        location = derive_action("workflows/auth/nested/dir/wif.yaml")

        assert location.name == "auth"
        assert location.readme_path == "workflows/auth/README.md"
        assert location.relative_name == "nested/dir/wif"

    def test_derive_action_name(self):
        assert derive_action_name("workflows/get-gke-credentials/gke.yml") == "get-gke-credentials"

    @pytest.mark.parametrize(
        "path",
        ["cloudrun-docker.yml", "workflows/cloudrun-docker.yml", "workflows//x.yml", "workflows/../x.yml"],
    )
    def test_invalid_paths(self, path):
        with pytest.raises(InvalidPathError) as exc_info:
            derive_action(path, workflow_id="wf")
        assert exc_info.value.path == path
        assert exc_info.value.workflow_id == "wf"


class TestGroupWorkflows:
    def test_groups_sorted_by_action_and_workflow_id(self):
        manifest = _manifest(
            {
                "upload-folder": ("workflows/upload-cloud-storage/upload-folder.yml", False),
                "cloudrun-source": ("workflows/deploy-cloudrun/cloudrun-source.yml", True),
                "wif": ("workflows/auth/wif.yml", False),
                "cloudrun-docker": ("workflows/deploy-cloudrun/cloudrun-docker.yml", True),
            }
        )

        groups = group_workflows(manifest, _properties(manifest))

        assert [g.name for g in groups] == ["auth", "deploy-cloudrun", "upload-cloud-storage"]
        cloudrun = groups[1]
        assert [w.id for w in cloudrun.workflows] == ["cloudrun-docker", "cloudrun-source"]
        assert cloudrun.path == "workflows/deploy-cloudrun"
        assert cloudrun.readme_path == "workflows/deploy-cloudrun/README.md"

    def test_rows_carry_properties_and_record_fields(self):
        manifest = _manifest({"cloudrun-docker": ("workflows/deploy-cloudrun/cloudrun-docker.yml", True)})

        (group,) = group_workflows(manifest, _properties(manifest))
        (row,) = group.workflows

        assert row.name == "Name of cloudrun-docker"
        assert row.description == "About cloudrun-docker"
        assert row.relative_name == "cloudrun-docker"
        assert row.starter is True
        assert row.workflow_path == "workflows/deploy-cloudrun/cloudrun-docker.yml"

    def test_stable_across_runs_and_insertion_order(self):
        entries = {
            f"wf-{i}": (f"workflows/action-{i % 3}/wf-{i}.yml", i % 2 == 0) for i in range(9)
        }
        forward = _manifest(entries)
        backward = _manifest(dict(reversed(list(entries.items()))))

        first = group_workflows(forward, _properties(forward))
        second = group_workflows(forward, _properties(forward))
        third = group_workflows(backward, _properties(backward))

        assert first == second == third
        names = [g.name for g in first]
        assert names == sorted(names)

    def test_invalid_path_fails(self):
        manifest = _manifest({"bad": ("bad.yml", False)})
        with pytest.raises(InvalidPathError):
            group_workflows(manifest, _properties(manifest))

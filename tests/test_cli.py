"""
Tests for the workflow-catalog CLI entry point.

Covers:
  - generate workflow (success, duplicate ID, invalid --type)
  - generate readme and --check exit codes
  - release honouring OUTPUT_PATH
  - --version and log level validation
"""

import json

import pytest

from workflow_catalog.cli import EXIT_INTERRUPTED, build_parser, main


def _run(catalog_root, *args):
    return main(["--root", str(catalog_root), *args])


class TestGenerateWorkflow:
    def test_creates_workflow(self, catalog_root, capsys):
        code = _run(catalog_root, "generate", "workflow", "deploy-cloudrun/cloudrun-docker", "--starter")

        assert code == 0
        assert "cloudrun-docker" in capsys.readouterr().out
        manifest = json.loads((catalog_root / "workflow.config.json").read_text())
        assert manifest["cloudrun-docker"]["starter"] is True
        assert manifest["cloudrun-docker"]["type"] == "deployments"

    def test_type_option(self, catalog_root):
        assert _run(catalog_root, "generate", "workflow", "act/wf", "--type", "ci") == 0

        manifest = json.loads((catalog_root / "workflow.config.json").read_text())
        assert manifest["wf"]["type"] == "ci"
        assert manifest["wf"]["starter"] is False

    def test_duplicate_id_fails(self, catalog_root, add_workflow, capsys):
        add_workflow("wf", "act")

        code = _run(catalog_root, "generate", "workflow", "act/wf")

        assert code == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_type_is_a_usage_error(self, catalog_root):
        with pytest.raises(SystemExit) as exc_info:
            _run(catalog_root, "generate", "workflow", "act/wf", "--type", "nonsense")
        assert exc_info.value.code == 2

    def test_path_without_action_fails(self, catalog_root, capsys):
        assert _run(catalog_root, "generate", "workflow", "wf") == 1
        assert "Error:" in capsys.readouterr().err


class TestGenerateReadme:
    def test_generate_then_check(self, catalog_root, add_workflow):
        add_workflow("wf", "act", starter=True)

        assert _run(catalog_root, "generate", "readme", "--check") == 1
        assert _run(catalog_root, "generate", "readme") == 0
        assert (catalog_root / "README.md").exists()
        assert _run(catalog_root, "generate", "readme", "--check") == 0

    def test_stale_readme_message(self, catalog_root, add_workflow, capsys):
        add_workflow("wf", "act")
        _run(catalog_root, "generate", "readme")
        add_workflow("wf-2", "act")
        capsys.readouterr()

        assert _run(catalog_root, "generate", "readme", "--check") == 1
        assert "has not been updated" in capsys.readouterr().err

    def test_invalid_manifest_fails_without_writing(self, catalog_root, add_workflow, capsys):
        add_workflow("wf", "act")
        (catalog_root / "workflows/act/wf.yml").unlink()

        assert _run(catalog_root, "generate", "readme") == 1
        assert "Error:" in capsys.readouterr().err
        assert not (catalog_root / "README.md").exists()

    def test_undecodable_manifest_is_reported(self, catalog_root, capsys):
        (catalog_root / "workflow.config.json").write_bytes(b'{"a\xff": {}}')

        assert _run(catalog_root, "generate", "readme") == 1
        assert "Error: Manifest" in capsys.readouterr().err


class TestRelease:
    def test_release_to_output_path(self, catalog_root, add_workflow, tmp_path, monkeypatch):
        add_workflow("cloudrun-docker", "deploy-cloudrun", starter=True)
        add_workflow("upload-folder", "upload-cloud-storage")
        dest = tmp_path / "starter-workflows"
        monkeypatch.setenv("OUTPUT_PATH", str(dest))

        assert _run(catalog_root, "--log-level", "WARNING", "release") == 0

        assert sorted(p.name for p in (dest / "deployments").iterdir()) == [
            "google-cloudrun-docker.yml",
            "properties",
        ]

    def test_interrupt_exit_code(self, catalog_root, add_workflow, monkeypatch):
        add_workflow("wf", "act", starter=True)

        def interrupted(settings, *, link=False):
            raise KeyboardInterrupt

        monkeypatch.setattr("workflow_catalog.cli.release", interrupted)

        assert _run(catalog_root, "release") == EXIT_INTERRUPTED


class TestParser:
    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "workflow-catalog" in capsys.readouterr().out

    def test_command_required(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_unknown_log_level_option(self, catalog_root):
        with pytest.raises(SystemExit) as exc_info:
            _run(catalog_root, "--log-level", "chatty", "generate", "readme")
        assert exc_info.value.code == 2

    def test_log_level_option_is_case_insensitive(self):
        args = build_parser().parse_args(["--log-level", "debug", "release"])
        assert args.log_level == "DEBUG"

    def test_unknown_log_level_env(self, catalog_root, monkeypatch, capsys):
        monkeypatch.setenv("LOG_LEVEL", "chatty")

        assert _run(catalog_root, "generate", "readme") == 1
        assert "Error: invalid settings" in capsys.readouterr().err

    def test_defaults(self):
        args = build_parser().parse_args(["generate", "workflow", "act/wf"])
        assert args.starter is False
        assert args.type == "deployments"
        assert args.root is None

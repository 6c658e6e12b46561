"""
Catalog Configuration — The explicit settings object passed to every command.

Replaces module-level path globals with one typed object:
  - Repository layout (manifest, templates, workflows root, properties dir)
  - Output override (OUTPUT_PATH) for the README and release commands
  - Logging (level, JSON output)

All relative paths are resolved against `root_dir`.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_README_OUTPUT = "README.md"
DEFAULT_RELEASE_OUTPUT = "../starter-workflows"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CatalogSettings(BaseSettings):
    """Catalog-wide settings, overridable from the environment or a .env file."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Repository layout ────────────────────────────────────────────
    root_dir: Path = Path(".")
    manifest_path: str = "workflow.config.json"
    templates_dir: str = "templates"
    workflows_root: str = "workflows"
    properties_dir: str = "properties"

    readme_template: str = "README.tmpl.md"
    properties_template: str = "workflow.properties.tmpl.json"

    # ── Output ───────────────────────────────────────────────────────
    # OUTPUT_PATH: README file for `generate readme`, destination
    # repository root for `release`.
    output_path: str | None = None

    # ── Logging ──────────────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool = False

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return level

    def resolve(self, relative: str | Path) -> Path:
        """Resolve a repository-relative path against root_dir."""
        return self.root_dir / relative

    @property
    def manifest_file(self) -> Path:
        return self.resolve(self.manifest_path)

    @property
    def templates_path(self) -> Path:
        return self.resolve(self.templates_dir)

    @property
    def readme_output_path(self) -> Path:
        return self.resolve(self.output_path or DEFAULT_README_OUTPUT)

    @property
    def release_output_path(self) -> Path:
        return self.resolve(self.output_path or DEFAULT_RELEASE_OUTPUT)


@lru_cache
def get_settings() -> CatalogSettings:
    """Singleton accessor — parsed once, cached for the process."""
    return CatalogSettings()

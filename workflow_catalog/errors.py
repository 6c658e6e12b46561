"""
Structured Error Taxonomy — Typed exceptions for the workflow catalog tooling.

Design principles:
  - Every error carries `error_code` + `exit_code` for the CLI
  - Validation problems are collected per record, then raised together
  - Structured logging friendly: all errors serialize cleanly to JSON
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    # Base
    "CatalogError",
    # Input layer
    "ManifestParseError",
    "InvalidPathError",
    # Validation layer
    "MissingFileError",
    "ManifestValidationError",
    # Scaffolding layer
    "DuplicateIDError",
    "PathCollisionError",
    # Output layer
    "TemplateRenderError",
    "CatalogWriteError",
]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  Base
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class CatalogError(Exception):
    """Root exception for the workflow catalog.

    Attributes:
        error_code: Machine-readable code for logs and CI output.
        exit_code: Process exit status the CLI uses for this error.
    """

    error_code: str = "CATALOG_ERROR"
    exit_code: int = 1

    def __init__(self, message: str, *, detail: str | None = None):
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict:
        """Serialize for structured logging."""
        return {
            "error_code": self.error_code,
            "message": str(self),
            "detail": self.detail,
        }


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  Input Layer — Manifest / properties parsing and path derivation
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class ManifestParseError(CatalogError):
    """A JSON manifest or properties file is missing or malformed."""

    error_code = "PARSE_ERROR"

    def __init__(self, message: str, *, path: str | Path = "", **kwargs):
        self.path = str(path)
        super().__init__(message, **kwargs)

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["path"] = self.path
        return d


class InvalidPathError(CatalogError):
    """A workflow path has too few segments to derive its owning action."""

    error_code = "INVALID_PATH"

    def __init__(self, message: str, *, path: str = "", workflow_id: str = "", **kwargs):
        self.path = path
        self.workflow_id = workflow_id
        super().__init__(message, **kwargs)

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["path"] = self.path
        d["workflow_id"] = self.workflow_id
        return d


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  Validation Layer — Collected, then raised as one failure
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class MissingFileError(CatalogError):
    """A path referenced by a manifest record does not exist."""

    error_code = "MISSING_FILE"

    def __init__(
        self, message: str, *, workflow_id: str = "", path: str = "", kind: str = "", **kwargs
    ):
        self.workflow_id = workflow_id
        self.path = path
        self.kind = kind
        super().__init__(message, **kwargs)

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["workflow_id"] = self.workflow_id
        d["path"] = self.path
        d["kind"] = self.kind
        return d


class ManifestValidationError(CatalogError):
    """One or more manifest records failed validation."""

    error_code = "VALIDATION_FAILED"

    def __init__(self, message: str, *, problems: list[CatalogError] | None = None, **kwargs):
        self.problems = problems or []
        super().__init__(message, **kwargs)

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["problems"] = [p.to_dict() for p in self.problems]
        return d


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  Scaffolding Layer — Conflicts detected before any write
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class DuplicateIDError(CatalogError):
    """The workflow ID is already registered in the manifest."""

    error_code = "DUPLICATE_ID"

    def __init__(self, message: str, *, workflow_id: str = "", **kwargs):
        self.workflow_id = workflow_id
        super().__init__(message, **kwargs)

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["workflow_id"] = self.workflow_id
        return d


class PathCollisionError(CatalogError):
    """A file the scaffolder would create already exists on disk."""

    error_code = "PATH_COLLISION"

    def __init__(self, message: str, *, path: str | Path = "", **kwargs):
        self.path = str(path)
        super().__init__(message, **kwargs)

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["path"] = self.path
        return d


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  Output Layer — Rendering and filesystem writes
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class TemplateRenderError(CatalogError):
    """A template is missing, malformed, or failed while rendering."""

    error_code = "TEMPLATE_ERROR"

    def __init__(self, message: str, *, template: str = "", **kwargs):
        self.template = template
        super().__init__(message, **kwargs)

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["template"] = self.template
        return d


class CatalogWriteError(CatalogError):
    """Writing, copying or linking a file failed."""

    error_code = "WRITE_ERROR"

    def __init__(self, message: str, *, path: str | Path = "", **kwargs):
        self.path = str(path)
        super().__init__(message, **kwargs)

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["path"] = self.path
        return d

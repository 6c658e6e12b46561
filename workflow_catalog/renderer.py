"""
Template Renderer — Jinja2 rendering of the README index and properties stubs.

Templates live in the repository `templates/` directory. The environment
uses StrictUndefined: a template referencing a field the context does not
have fails instead of rendering a blank.
"""

from __future__ import annotations

from pathlib import Path

import jinja2
import structlog
from pydantic import BaseModel

from workflow_catalog.errors import CatalogWriteError, TemplateRenderError

logger = structlog.get_logger(__name__)


def markdown_cell(value) -> str:
    """Flatten text onto one line and escape pipes so it fits a table cell."""
    return " ".join(str(value).split()).replace("|", "\\|")


class TemplateRenderer:
    """
    Renders templates from a directory against pydantic model contexts.

    Usage:
        renderer = TemplateRenderer(settings.templates_path)
        renderer.render_to_file("README.tmpl.md", Path("README.md"), context)
    """

    def __init__(self, templates_dir: Path):
        self._templates_dir = Path(templates_dir)
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self._templates_dir)),
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,
        )
        self._env.filters["md_cell"] = markdown_cell

    @property
    def templates_dir(self) -> Path:
        return self._templates_dir

    def render(self, template_name: str, context: BaseModel) -> str:
        """
        Render a template to a string.

        The context is dumped to a fresh dict, so templates can never
        mutate the caller's models.

        Raises:
            TemplateRenderError: Missing template, syntax error, undefined
                field, or any other failure while rendering.
        """
        try:
            template = self._env.get_template(template_name)
        except jinja2.TemplateNotFound as exc:
            raise TemplateRenderError(
                f"Template not found: {self._templates_dir / template_name}",
                template=template_name,
            ) from exc
        except jinja2.TemplateSyntaxError as exc:
            raise TemplateRenderError(
                f"Failed to parse template {template_name} (line {exc.lineno}): {exc.message}",
                template=template_name,
            ) from exc

        try:
            return template.render(**context.model_dump(mode="json"))
        except jinja2.UndefinedError as exc:
            raise TemplateRenderError(
                f"Template {template_name} references an undefined field: {exc.message}",
                template=template_name,
            ) from exc
        except Exception as exc:
            raise TemplateRenderError(
                f"Failed to execute template {template_name}: {exc}",
                template=template_name,
            ) from exc

    def render_to_file(self, template_name: str, dest: Path, context: BaseModel) -> Path:
        """
        Render a template and write it to `dest`.

        Nothing is written unless rendering succeeds.

        Raises:
            TemplateRenderError: If rendering fails.
            CatalogWriteError: If the file cannot be written.
        """
        content = self.render(template_name, context)
        dest = Path(dest)
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise CatalogWriteError(f"Failed to create file {dest}: {exc}", path=dest) from exc

        logger.info("template_rendered", template=template_name, dest=str(dest))
        return dest

"""Jinja2 template rendering for build assets.

Provides the TemplateRenderer class which materialises a named template tree
from a :class:`~buildassets.scaffolder.tree.TemplateStore` into a destination
directory.  Entries ending in ``.j2`` are rendered with the bound context (the
suffix is stripped); every other entry is copied byte-for-byte.  Path
segments may themselves contain ``{{ ... }}`` placeholders.

Existing files are overwritten unconditionally and nothing is rolled back if
a later entry fails.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path, PurePosixPath
from typing import Any, Callable

import yaml
from jinja2 import BaseLoader, Environment, StrictUndefined, TemplateNotFound

from .tree import DirectoryTemplateStore, TemplateStore

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".j2"

_PATH_PLACEHOLDER = re.compile(r"\{\{.*?\}\}")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class RenderError(Exception):
    """Raised when a template tree cannot be materialised."""


class TemplateTreeNotFoundError(RenderError):
    """Raised when the requested template tree does not exist in the store."""

    def __init__(self, root: str) -> None:
        self.root = root
        super().__init__(f"Template tree not found: {root}")


# ---------------------------------------------------------------------------
# Jinja2 loader over a template store
# ---------------------------------------------------------------------------


class _StoreLoader(BaseLoader):
    """Resolves ``<root>/<path>`` template names against a template store."""

    def __init__(self, store: TemplateStore) -> None:
        self.store = store

    def get_source(
        self, environment: Environment, template: str
    ) -> tuple[str, str, Callable[[], bool]]:
        root, _, path = template.partition("/")
        if not path or not self.store.has_tree(root):
            raise TemplateNotFound(template)
        try:
            source = self.store.open(root, path).decode("utf-8")
        except FileNotFoundError:
            raise TemplateNotFound(template) from None
        return source, template, lambda: True


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders template trees into a destination directory.

    Undefined variables are an error (``StrictUndefined``), so a template that
    references a field the bound context does not carry fails loudly instead
    of rendering an empty string.
    """

    def __init__(self, store: TemplateStore | None = None) -> None:
        self.store: TemplateStore = store if store is not None else DirectoryTemplateStore()
        self.env = Environment(
            loader=_StoreLoader(self.store),
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["yaml_quote"] = _yaml_quote_filter
        self.env.filters["nsis_quote"] = _nsis_quote_filter
        self.env.filters["desktop_escape"] = _desktop_escape_filter

    # -- Single template rendering -----------------------------------------

    def render(self, root: str, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template from tree *root* with *context*."""
        template = self.env.get_template(f"{root}/{template_path}")
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        return self.env.from_string(template_string).render(**context)

    def output_path(self, template_path: str, context: dict[str, Any]) -> PurePosixPath:
        """Return the destination-relative path for a tree entry.

        Placeholders in the path are substituted and a trailing ``.j2`` is
        stripped.

        Raises:
            RenderError: If a placeholder renders blank, or the result is
                empty, absolute, or escapes the destination directory.
        """
        rendered = template_path
        if "{{" in rendered:
            for placeholder in _PATH_PLACEHOLDER.findall(template_path):
                if not self.render_string(placeholder, context).strip():
                    raise RenderError(
                        f"Template {template_path!r} has a blank path placeholder: {placeholder}"
                    )
            rendered = self.render_string(rendered, context)
        if rendered.endswith(TEMPLATE_SUFFIX):
            rendered = rendered[: -len(TEMPLATE_SUFFIX)]

        rel = PurePosixPath(rendered)
        if not rendered or rel.is_absolute() or ".." in rel.parts or not rel.name:
            raise RenderError(
                f"Template {template_path!r} renders to an invalid output path: {rendered!r}"
            )
        return rel

    # -- Tree rendering ------------------------------------------------------

    def render_tree(
        self,
        root: str,
        output_dir: str | Path,
        context: dict[str, Any],
    ) -> list[Path]:
        """Materialise every entry of tree *root* under *output_dir*.

        Entries are processed in sorted path order.  The directory structure is
        preserved: ``windows/info.json.j2`` is written to
        ``<output_dir>/windows/info.json``.

        Args:
            root: Tree identifier, e.g. ``"foundation"`` or ``"evolving"``.
            output_dir: Destination directory.
            context: Template variables.

        Returns:
            List of written file paths, in processing order.

        Raises:
            TemplateTreeNotFoundError: If *root* is not in the store.
            RenderError: If an entry maps to an unsafe output path.
            jinja2.TemplateError: On any substitution failure.
            OSError: On any write failure.
        """
        if not self.store.has_tree(root):
            raise TemplateTreeNotFoundError(root)

        out_base = Path(output_dir)
        written: list[Path] = []

        for template_path in self.store.list(root):
            output_file = out_base.joinpath(*self.output_path(template_path, context).parts)

            if template_path.endswith(TEMPLATE_SUFFIX):
                data = self.render(root, template_path, context).encode("utf-8")
            else:
                data = self.store.open(root, template_path)

            _write_file(output_file, data)
            logger.debug("Rendered %s/%s -> %s", root, template_path, output_file)
            written.append(output_file)

        logger.info("Rendered %d file(s) from tree %r into %s", len(written), root, out_base)
        return written

    # -- Utility -----------------------------------------------------------

    def list_templates(self, root: str) -> list[str]:
        """Return the sorted entry paths of tree *root*."""
        return self.store.list(root)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------


def _yaml_quote_filter(value: Any) -> str:
    """Render *value* as a double-quoted YAML scalar on a single line."""
    text = yaml.safe_dump(
        str(value), default_style='"', allow_unicode=True, width=float("inf")
    )
    if text.endswith("\n...\n"):
        text = text[: -len("\n...\n")]
    return text.rstrip("\n")


_NSIS_ESCAPES = {"$": "$$", '"': '$\\"', "\n": "$\\n", "\r": "$\\r", "\t": "$\\t"}


def _nsis_quote_filter(value: Any) -> str:
    """Escape *value* for use inside a double-quoted NSIS string."""
    return "".join(_NSIS_ESCAPES.get(ch, ch) for ch in str(value))


_DESKTOP_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def _desktop_escape_filter(value: Any) -> str:
    """Escape *value* as a freedesktop ``.desktop`` string value."""
    return "".join(_DESKTOP_ESCAPES.get(ch, ch) for ch in str(value))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _write_file(path: Path, content: bytes) -> None:
    """Create parent dirs and write *content*, replacing any existing file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)

"""Build asset generation and update orchestrator.

``generate`` resolves the raw options, renders the foundation tree once and
then the evolving tree (which includes the ``appdata.yaml`` config snapshot).
``update`` reads that snapshot back and re-renders the evolving tree only, so
files in the foundation tree are never touched after project creation.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from rich.console import Console

from ..config import EVOLVING_TREE, FOUNDATION_TREE, GenerateOptions, UpdateOptions
from ..resolver import resolve_parameters
from ..utils import ensure_dir, print_success
from .snapshot import read_snapshot, snapshot_path
from .templates import TemplateRenderer

logger = logging.getLogger(__name__)


class BuildAssetsGenerator:
    """Renders the foundation and evolving template trees.

    Args:
        renderer: Renderer bound to a template store.  Defaults to the packaged
            templates.
        silent: Suppress progress messages.  Errors are always raised.
    """

    def __init__(self, renderer: TemplateRenderer | None = None, *, silent: bool = False) -> None:
        self.renderer = renderer if renderer is not None else TemplateRenderer()
        self.silent = silent

    def _console(self, silent: bool) -> Console:
        return Console(quiet=self.silent or silent)

    # -- Public API --------------------------------------------------------

    def generate(
        self,
        options: GenerateOptions,
        *,
        platform: str | None = None,
        today: date | None = None,
    ) -> list[Path]:
        """Generate both template trees into ``options.directory``.

        Args:
            options: Raw generate options.
            platform: Target platform override for the binary name default.
            today: Date override for the comment default.

        Returns:
            Every written file path, foundation tree first.
        """
        params = resolve_parameters(options, platform=platform, today=today)
        out = self._console(options.silent)
        out.print(f"Generating build assets in {params.directory}", markup=False, highlight=False)

        context = params.template_context()
        written = self.renderer.render_tree(FOUNDATION_TREE, params.directory, context)
        written += self.renderer.render_tree(EVOLVING_TREE, params.directory, context)
        return written

    def update(self, options: UpdateOptions) -> list[Path]:
        """Re-render the evolving tree from a previously generated snapshot.

        Returns:
            The evolving-tree file paths that were rewritten.

        Raises:
            SnapshotError: If the config file is unnamed, missing or invalid.
        """
        # An empty config name is rejected before touching the filesystem.
        snapshot_path(options.directory, options.config_file)

        directory = ensure_dir(options.directory)
        snapshot = read_snapshot(directory, options.config_file)

        written = self.renderer.render_tree(
            EVOLVING_TREE, directory, snapshot.template_context(directory)
        )
        print_success(
            f"Successfully updated build assets in {directory}",
            out=self._console(options.silent),
        )
        return written


# ---------------------------------------------------------------------------
# Convenience wrappers
# ---------------------------------------------------------------------------


def generate_build_assets(
    options: GenerateOptions,
    *,
    renderer: TemplateRenderer | None = None,
    platform: str | None = None,
    today: date | None = None,
) -> list[Path]:
    """Run :meth:`BuildAssetsGenerator.generate` with a fresh generator."""
    return BuildAssetsGenerator(renderer).generate(options, platform=platform, today=today)


def update_build_assets(
    options: UpdateOptions,
    *,
    renderer: TemplateRenderer | None = None,
) -> list[Path]:
    """Run :meth:`BuildAssetsGenerator.update` with a fresh generator."""
    return BuildAssetsGenerator(renderer).update(options)

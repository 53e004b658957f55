"""buildassets scaffolder -- renders and updates build asset trees.

Two template trees ship with the package.  The ``foundation`` tree is rendered
once when a project is created.  The ``evolving`` tree is rendered at creation
and again on every update, and carries the ``appdata.yaml`` config snapshot
that drives later updates.

Quick usage::

    from buildassets.config import GenerateOptions, UpdateOptions
    from buildassets.scaffolder import BuildAssetsGenerator

    generator = BuildAssetsGenerator()
    generator.generate(GenerateOptions(directory="build", name="My App"))
    generator.update(UpdateOptions(directory="build"))
"""

from buildassets.scaffolder.generator import (
    BuildAssetsGenerator,
    generate_build_assets,
    update_build_assets,
)
from buildassets.scaffolder.snapshot import SnapshotError, read_snapshot
from buildassets.scaffolder.templates import (
    RenderError,
    TemplateRenderer,
    TemplateTreeNotFoundError,
)
from buildassets.scaffolder.tree import DirectoryTemplateStore, MemoryTemplateStore

__all__ = [
    "BuildAssetsGenerator",
    "DirectoryTemplateStore",
    "MemoryTemplateStore",
    "RenderError",
    "SnapshotError",
    "TemplateRenderer",
    "TemplateTreeNotFoundError",
    "generate_build_assets",
    "read_snapshot",
    "update_build_assets",
]

"""Read-only template tree providers.

A template store holds one or more named trees (``foundation``,
``evolving``).  Each tree is a flat set of POSIX-style relative paths mapping
to raw bytes.  The renderer only depends on the :class:`TemplateStore`
protocol, so tests can swap the packaged templates for an in-memory store.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Protocol

# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateStore(Protocol):
    """Interface every template provider implements."""

    def has_tree(self, root: str) -> bool: ...

    def list(self, root: str) -> list[str]: ...

    def open(self, root: str, path: str) -> bytes: ...


# ---------------------------------------------------------------------------
# Directory-backed store
# ---------------------------------------------------------------------------


class DirectoryTemplateStore:
    """Serves trees from subdirectories of *base_dir*.

    The packaged templates live in ``buildassets/scaffolder/templates/`` with
    one subdirectory per tree.
    """

    def __init__(self, base_dir: str | Path | None = None) -> None:
        self.base_dir = Path(base_dir) if base_dir is not None else _DEFAULT_TEMPLATE_DIR

    def has_tree(self, root: str) -> bool:
        return (self.base_dir / root).is_dir()

    def list(self, root: str) -> list[str]:
        """Return every file under *root* as a sorted POSIX relative path."""
        tree_dir = self.base_dir / root
        if not tree_dir.is_dir():
            return []
        return sorted(
            p.relative_to(tree_dir).as_posix()
            for p in tree_dir.rglob("*")
            if p.is_file()
        )

    def open(self, root: str, path: str) -> bytes:
        return (self.base_dir / root / path).read_bytes()


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------


class MemoryTemplateStore:
    """Trees held in memory, e.g. ``{"evolving": {"a.txt.j2": "..."}}``.

    Text entries are stored UTF-8 encoded.
    """

    def __init__(self, trees: Mapping[str, Mapping[str, str | bytes]]) -> None:
        self._trees: dict[str, dict[str, bytes]] = {
            root: {
                path: content.encode("utf-8") if isinstance(content, str) else bytes(content)
                for path, content in entries.items()
            }
            for root, entries in trees.items()
        }

    def has_tree(self, root: str) -> bool:
        return root in self._trees

    def list(self, root: str) -> list[str]:
        return sorted(self._trees.get(root, {}))

    def open(self, root: str, path: str) -> bytes:
        try:
            return self._trees[root][path]
        except KeyError:
            raise FileNotFoundError(f"Template not found: {root}/{path}") from None

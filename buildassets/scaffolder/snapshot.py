"""Config snapshot store.

The snapshot is written as the ``appdata.yaml.j2`` entry of the evolving
template tree, so there is no separate write path here.  This module reads a
previously generated snapshot back so that ``update`` can re-render the
evolving tree without the user re-supplying every parameter.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..config import ConfigSnapshot

logger = logging.getLogger(__name__)


class _TextLoader(yaml.SafeLoader):
    """Safe loader that keeps booleans, numbers and timestamps as source text."""


def _construct_text(loader: _TextLoader, node: yaml.ScalarNode) -> str:
    return loader.construct_scalar(node)


for _tag in ("bool", "int", "float", "timestamp"):
    _TextLoader.add_constructor(f"tag:yaml.org,2002:{_tag}", _construct_text)


class SnapshotError(Exception):
    """Raised when the config snapshot required for an update is missing or invalid."""


def snapshot_path(directory: str | Path, config_file: str) -> Path:
    """Return the location of *config_file* inside *directory*.

    Raises:
        SnapshotError: If *config_file* is empty.
    """
    if not config_file:
        raise SnapshotError("config file required for update")
    return Path(directory) / config_file


def read_snapshot(directory: str | Path, config_file: str) -> ConfigSnapshot:
    """Load and deserialise the snapshot ``<directory>/<config_file>``.

    Unknown keys are ignored and missing keys load as empty strings.  Scalars
    keep their source text (an unquoted ``1.10`` stays ``"1.10"``) and ``null``
    loads as an empty string.  No defaults are applied.

    Raises:
        SnapshotError: If the name is empty, the file does not exist, or it
            does not hold a YAML mapping of snapshot fields.
        OSError: If the file exists but cannot be read.
    """
    path = snapshot_path(directory, config_file)
    if not path.exists():
        raise SnapshotError(f"config file {path} does not exist")

    raw = path.read_text(encoding="utf-8")
    try:
        data = yaml.load(raw, Loader=_TextLoader)
    except yaml.YAMLError as exc:
        raise SnapshotError(f"config file {path} is not valid YAML: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SnapshotError(f"config file {path} must contain a mapping, got {type(data).__name__}")

    try:
        snapshot = ConfigSnapshot.model_validate(data)
    except ValidationError as exc:
        raise SnapshotError(f"config file {path} has invalid fields: {exc}") from exc

    logger.debug("Loaded config snapshot from %s: %s", path, snapshot)
    return snapshot

"""Parameter resolution for ``generate``.

Turns raw :class:`~buildassets.config.GenerateOptions` into a fully defaulted,
immutable :class:`~buildassets.config.ParameterSet`.  The only step that can
fail is creating the destination directory.
"""

from __future__ import annotations

import logging
import sys
from datetime import date

from .config import (
    DEFAULT_PRODUCT_COMPANY,
    DEFAULT_PRODUCT_COPYRIGHT,
    DEFAULT_PRODUCT_DESCRIPTION,
    DEFAULT_PRODUCT_NAME,
    DEFAULT_PRODUCT_VERSION,
    IDENTIFIER_PREFIX,
    GenerateOptions,
    ParameterSet,
)
from .utils import ensure_dir, normalise_name

logger = logging.getLogger(__name__)

WINDOWS_EXECUTABLE_SUFFIX = ".exe"


def is_windows(platform: str | None = None) -> bool:
    """Return ``True`` if *platform* (default: the running interpreter's) is Windows."""
    platform = (platform or sys.platform).lower()
    return platform.startswith("win")


def default_comments(company: str, year: int) -> str:
    return f"(c) {year} {company}"


def default_identifier(name: str) -> str:
    return IDENTIFIER_PREFIX + normalise_name(name)


def default_binary_name(name: str, platform: str | None = None) -> str:
    binary = normalise_name(name)
    if is_windows(platform):
        binary += WINDOWS_EXECUTABLE_SUFFIX
    return binary


def resolve_parameters(
    options: GenerateOptions,
    *,
    platform: str | None = None,
    today: date | None = None,
) -> ParameterSet:
    """Resolve raw generate options into a :class:`ParameterSet`.

    Args:
        options: Raw user-supplied options; any text field may be empty.
        platform: Target platform name (``"windows"``, ``"linux"``, ``"darwin"``
            or a ``sys.platform`` value).  Defaults to the running platform.
        today: Date used for the default comment.  Defaults to today.

    Returns:
        The resolved parameter set.  Its ``directory`` is absolute and exists.

    Raises:
        OSError: If the destination directory cannot be created.
    """
    directory = ensure_dir(options.directory)

    company = options.product_company or DEFAULT_PRODUCT_COMPANY
    year = (today or date.today()).year

    params = ParameterSet(
        name=options.name,
        binary_name=options.binary or default_binary_name(options.name, platform),
        product_name=options.product_name or DEFAULT_PRODUCT_NAME,
        product_description=options.product_description or DEFAULT_PRODUCT_DESCRIPTION,
        product_version=options.product_version or DEFAULT_PRODUCT_VERSION,
        product_company=company,
        product_copyright=options.product_copyright or DEFAULT_PRODUCT_COPYRIGHT,
        product_comments=options.product_comments or default_comments(company, year),
        product_identifier=options.product_identifier or default_identifier(options.name),
        directory=directory,
    )
    logger.debug("Resolved parameters: %s", params)
    return params

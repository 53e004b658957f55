"""buildassets configuration and data models.

All inputs and resolved values are Pydantic v2 models so they are validated at
construction time.  Raw user input arrives as :class:`GenerateOptions` or
:class:`UpdateOptions`; the resolver turns the former into an immutable
:class:`ParameterSet`, and the evolving template tree persists a
:class:`ConfigSnapshot` of it for later updates.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_PRODUCT_NAME = "My Product"
DEFAULT_PRODUCT_DESCRIPTION = "My Product Description"
DEFAULT_PRODUCT_VERSION = "0.1.0"
DEFAULT_PRODUCT_COMPANY = "My Company"
DEFAULT_PRODUCT_COPYRIGHT = "© now, My Company"

IDENTIFIER_PREFIX = "com.buildassets."

DEFAULT_UPDATE_DIR = "build"
DEFAULT_CONFIG_FILE = "appdata.yaml"

FOUNDATION_TREE = "foundation"
EVOLVING_TREE = "evolving"


# ---------------------------------------------------------------------------
# Raw invocation options
# ---------------------------------------------------------------------------


class GenerateOptions(BaseModel):
    """Raw options for ``generate``.  Empty strings mean "use the default"."""

    directory: str = Field(default=".", description="The directory to generate the files into")
    name: str = Field(default="", description="The name of the project")
    binary: str = Field(default="", description="The name of the binary")
    product_name: str = Field(default=DEFAULT_PRODUCT_NAME, description="The name of the product")
    product_description: str = Field(
        default=DEFAULT_PRODUCT_DESCRIPTION, description="The description of the product"
    )
    product_version: str = Field(default=DEFAULT_PRODUCT_VERSION, description="The version of the product")
    product_company: str = Field(default=DEFAULT_PRODUCT_COMPANY, description="The company of the product")
    product_copyright: str = Field(default=DEFAULT_PRODUCT_COPYRIGHT, description="The copyright notice")
    product_comments: str = Field(default="", description="Comments to add to the generated files")
    product_identifier: str = Field(
        default="", description="The product identifier, e.g com.mycompany.myproduct"
    )
    silent: bool = Field(default=False, description="Suppress output to console")


class UpdateOptions(BaseModel):
    """Raw options for ``update``."""

    directory: str = Field(default=DEFAULT_UPDATE_DIR, description="The directory to generate the files into")
    config_file: str = Field(default=DEFAULT_CONFIG_FILE, description="The config file to use")
    silent: bool = Field(default=False, description="Suppress output to console")


# ---------------------------------------------------------------------------
# Resolved parameters
# ---------------------------------------------------------------------------


class ParameterSet(BaseModel):
    """Fully resolved scaffold-generation inputs.

    Produced once per invocation by :func:`buildassets.resolver.resolve_parameters`
    and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    binary_name: str
    product_name: str
    product_description: str
    product_version: str
    product_company: str
    product_copyright: str
    product_comments: str
    product_identifier: str
    directory: Path

    def template_context(self) -> dict[str, Any]:
        """Return the variables available to every template."""
        return {
            "name": self.name,
            "binary_name": self.binary_name,
            "product_name": self.product_name,
            "product_description": self.product_description,
            "product_version": self.product_version,
            "product_company": self.product_company,
            "product_copyright": self.product_copyright,
            "product_comments": self.product_comments,
            "product_identifier": self.product_identifier,
            "directory": str(self.directory),
        }


class ConfigSnapshot(BaseModel):
    """The persisted subset of a :class:`ParameterSet`.

    Field aliases are the keys used in the on-disk ``appdata.yaml``.  Unknown
    keys are ignored and missing keys load as empty strings; no defaulting is
    re-applied when a snapshot is read back.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    binary_name: str = Field(default="", alias="binaryName")
    product_company: str = Field(default="", alias="companyName")
    product_name: str = Field(default="", alias="productName")
    product_identifier: str = Field(default="", alias="productIdentifier")
    product_description: str = Field(default="", alias="description")
    product_version: str = Field(default="", alias="productVersion")
    product_copyright: str = Field(default="", alias="copyright")
    product_comments: str = Field(default="", alias="comments")

    @field_validator("*", mode="before")
    @classmethod
    def _scalar_to_text(cls, value: Any) -> Any:
        # Hand-edited YAML may hold unquoted numbers or booleans.
        if value is None:
            return ""
        if isinstance(value, (bool, int, float)):
            return str(value)
        return value

    @classmethod
    def from_parameters(cls, params: ParameterSet) -> "ConfigSnapshot":
        """Project a resolved parameter set onto the persisted fields."""
        return cls(**{name: getattr(params, name) for name in cls.model_fields})

    def template_context(self, directory: Path) -> dict[str, Any]:
        """Return template variables; *directory* comes from the current invocation."""
        context: dict[str, Any] = {name: getattr(self, name) for name in type(self).model_fields}
        context["directory"] = str(directory)
        return context


# ---------------------------------------------------------------------------
# Runtime settings
# ---------------------------------------------------------------------------


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Process-level knobs, threaded explicitly into the generator and CLI."""

    template_dir: Path | None = Field(
        default=None, description="Override for the packaged template directory"
    )
    silent: bool = Field(default=False, description="Suppress progress output")
    verbose: bool = Field(default=False, description="Enable debug logging")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            BUILDASSETS_TEMPLATE_DIR, BUILDASSETS_SILENT, BUILDASSETS_VERBOSE.
        """
        template_dir = os.environ.get("BUILDASSETS_TEMPLATE_DIR")
        return cls(
            template_dir=Path(template_dir) if template_dir else None,
            silent=_env_flag("BUILDASSETS_SILENT"),
            verbose=_env_flag("BUILDASSETS_VERBOSE"),
        )

"""Shared pytest fixtures for the buildassets test suite.

Provides reusable fixtures for:
- A fixed "today" so comment defaults are deterministic
- Small in-memory foundation/evolving template trees
- Renderers bound to the in-memory store and to the packaged templates
- Generate options pointing at a temporary destination
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from buildassets.config import GenerateOptions
from buildassets.scaffolder.templates import TemplateRenderer
from buildassets.scaffolder.tree import MemoryTemplateStore


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

@pytest.fixture
def fixed_today() -> date:
    return date(2024, 5, 17)


# ---------------------------------------------------------------------------
# Template trees
# ---------------------------------------------------------------------------

APPDATA_TEMPLATE = """\
binaryName: {{ binary_name | yaml_quote }}
companyName: {{ product_company | yaml_quote }}
productName: {{ product_name | yaml_quote }}
productIdentifier: {{ product_identifier | yaml_quote }}
description: {{ product_description | yaml_quote }}
productVersion: {{ product_version | yaml_quote }}
copyright: {{ product_copyright | yaml_quote }}
comments: {{ product_comments | yaml_quote }}
"""

# A minimal PNG header; enough to prove bytes pass through untouched.
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\xff\xfe{{ not a template }}"


@pytest.fixture
def memory_trees() -> dict[str, dict[str, str | bytes]]:
    """Template trees mirroring the shape of the packaged ones."""
    return {
        "foundation": {
            "Taskfile.yml.j2": "name: {{ name }}\nbinary: {{ binary_name }}\n",
            "appicon.png": PNG_BYTES,
            "scripts/build.sh": "#!/bin/sh\necho {{ untouched }}\n",
        },
        "evolving": {
            "appdata.yaml.j2": APPDATA_TEMPLATE,
            "darwin/Info.plist.j2": (
                "<string>{{ product_name | e }}</string>\n"
                "<string>{{ product_identifier | e }}</string>\n"
            ),
            "windows/info.json.j2": '{"ProductVersion": {{ product_version | tojson }}}\n',
            "linux/{{ binary_name }}.desktop.j2": "Exec={{ binary_name }}\n",
        },
    }


@pytest.fixture
def memory_store(memory_trees) -> MemoryTemplateStore:
    return MemoryTemplateStore(memory_trees)


@pytest.fixture
def memory_renderer(memory_store) -> TemplateRenderer:
    return TemplateRenderer(memory_store)


@pytest.fixture
def packaged_renderer() -> TemplateRenderer:
    """Renderer bound to the templates shipped inside the package."""
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@pytest.fixture
def build_dir(tmp_path: Path) -> Path:
    """Destination directory for generated assets (not created up front)."""
    return tmp_path / "project" / "build"


@pytest.fixture
def generate_options(build_dir: Path) -> GenerateOptions:
    return GenerateOptions(
        directory=str(build_dir),
        name="My App",
        product_name="My App",
        product_description="An app for testing",
        product_version="1.2.3",
        product_company="Acme",
        product_copyright="© 2024, Acme",
        silent=True,
    )

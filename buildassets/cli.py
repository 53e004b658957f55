"""Command-line entry point.

Usage::

    buildassets generate --dir build --name "My App"
    buildassets update --dir build --config appdata.yaml
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from jinja2 import TemplateError
from rich.console import Console
from rich.logging import RichHandler

from buildassets.config import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_UPDATE_DIR,
    GenerateOptions,
    Settings,
    UpdateOptions,
)
from buildassets.scaffolder import (
    BuildAssetsGenerator,
    DirectoryTemplateStore,
    RenderError,
    SnapshotError,
    TemplateRenderer,
)
from buildassets.utils import error_console, print_error, print_summary_table

logger = logging.getLogger(__name__)

# flag -> help text; each flag's dest is also its GenerateOptions field
_GENERATE_FLAGS: dict[str, str] = {
    "--name": "The name of the project",
    "--binary": "The name of the binary",
    "--product-name": "The name of the product (default: My Product)",
    "--product-description": "The description of the product (default: My Product Description)",
    "--product-version": "The version of the product (default: 0.1.0)",
    "--product-company": "The company of the product (default: My Company)",
    "--product-copyright": "The copyright notice (default: © now, My Company)",
    "--product-comments": "Comments to add to the generated files (default: (c) <year> <company>)",
    "--product-identifier": "The product identifier, e.g com.mycompany.myproduct",
}


def _dest(flag: str) -> str:
    return flag.lstrip("-").replace("-", "_")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="buildassets",
        description="Generate and update platform build assets from templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  buildassets generate --dir build --name 'My App'\n"
            "  buildassets update --dir build\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate all build assets")
    generate.add_argument(
        "--dir",
        dest="directory",
        default=".",
        help="The directory to generate the files into (default: .)",
    )
    for flag, help_text in _GENERATE_FLAGS.items():
        generate.add_argument(flag, default=None, help=help_text)

    update = subparsers.add_parser("update", help="Re-generate the updatable build assets")
    update.add_argument(
        "--dir",
        dest="directory",
        default=DEFAULT_UPDATE_DIR,
        help=f"The directory to generate the files into (default: {DEFAULT_UPDATE_DIR})",
    )
    update.add_argument(
        "--config",
        dest="config_file",
        default=DEFAULT_CONFIG_FILE,
        help=f"The config file to use (default: {DEFAULT_CONFIG_FILE})",
    )

    for sub in (generate, update):
        sub.add_argument("--silent", action="store_true", help="Suppress output to console")
        sub.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``buildassets`` / ``python -m buildassets``."""
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()

    silent = args.silent or settings.silent
    _configure_logging(args.verbose or settings.verbose)

    renderer = TemplateRenderer(DirectoryTemplateStore(settings.template_dir))
    generator = BuildAssetsGenerator(renderer, silent=silent)

    try:
        if args.command == "generate":
            fields = {_dest(flag): getattr(args, _dest(flag)) for flag in _GENERATE_FLAGS}
            options = GenerateOptions(
                directory=args.directory,
                silent=silent,
                **{k: v for k, v in fields.items() if v is not None},
            )
            written = generator.generate(options)
            title = "Generated build assets"
            directory = Path(options.directory).absolute()
        else:
            update_options = UpdateOptions(
                directory=args.directory,
                config_file=args.config_file,
                silent=silent,
            )
            written = generator.update(update_options)
            title = "Updated build assets"
            directory = Path(update_options.directory).absolute()
    except (SnapshotError, RenderError, TemplateError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print_error(str(exc))
        sys.exit(1)

    print_summary_table(
        {"Directory": str(directory), "Files written": str(len(written))},
        title=title,
        out=Console(quiet=silent),
    )


if __name__ == "__main__":
    main()

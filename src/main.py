"""
Command-line interface for expanding and flattening App Service configuration.

``expand`` reads a document holding a user-authored ``site_config`` block and
writes the Web Apps API payload; ``flatten`` reads an API payload and writes
the ``site_config`` block back.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import pydantic

from src.core.block_registry import get_global_registry, register_builtin_mappers
from src.core.protocols import BlockMapper
from src.plugins.azurerm.exceptions import (
    AzureRMPluginError,
    ConfigLoadError,
    RemoteDataError,
    ValidationError,
)
from src.plugins.azurerm.loader import (
    OUTPUT_FORMATS,
    load_document,
    render_document,
    save_document,
)

DEFAULT_BLOCK = "site_config"


def configure_logging(debug: bool = False, verbose: bool = False) -> None:
    """Configure application logging.

    Logs go to stderr so that stdout only carries the rendered document.

    Args:
        debug: Enable debug-level logging if True.
        verbose: Enable verbose logging from plugins if True.
    """
    if debug:
        level = logging.DEBUG
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    elif verbose:
        level = logging.INFO
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    else:
        level = logging.WARNING
        format_str = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        stream=sys.stderr,
        force=True,  # Override existing configuration
    )


def _get_mapper(block: str) -> BlockMapper:
    register_builtin_mappers()
    return get_global_registry().get_mapper(block)


def expand_document(document: dict[str, Any], block: str) -> dict[str, Any]:
    """
    Expand the named block of a user document into an API payload.

    A document without the block expands to the service-defaults payload.
    """
    mapper = _get_mapper(block)
    wire = mapper.expand(document.get(block))
    return {"properties": {"siteConfig": wire.to_wire()}}


def flatten_document(payload: dict[str, Any], block: str) -> dict[str, Any]:
    """Flatten an API payload into a user document holding the named block."""
    mapper = _get_mapper(block)
    try:
        remote = mapper.parse_remote(payload)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        raise RemoteDataError(
            f"Invalid SiteConfig payload: {first['msg']}",
            field_name=".".join(str(part) for part in first["loc"]),
            actual_value=first.get("input"),
        ) from e
    return {block: [item.to_state() for item in mapper.flatten(remote)]}


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed command line arguments.
    """
    available_blocks = get_global_registry().get_available_blocks()

    parser = argparse.ArgumentParser(
        description=(
            "Translate App Service site_config blocks to and from the "
            "Azure Web Apps API"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build the API payload from a site_config block
  python -m src.main expand examples/site.yaml -o out/site_config.json

  # Turn an API response back into a site_config block
  python -m src.main flatten response.json --format yaml
        """,
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (
        ("expand", "Expand a user site_config document into an API payload"),
        ("flatten", "Flatten an API payload into a user site_config document"),
    ):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument("input_file", type=Path, help="YAML or JSON input document")
        sub.add_argument(
            "-o",
            "--output",
            dest="output_file",
            type=Path,
            help="Write the result here instead of stdout",
        )
        sub.add_argument(
            "--format",
            choices=OUTPUT_FORMATS,
            default="json" if command == "expand" else "yaml",
            help="Output format",
        )
        sub.add_argument(
            "--block",
            default=DEFAULT_BLOCK,
            choices=available_blocks,
            help="Configuration block to translate (default: %(default)s)",
        )
        sub.add_argument(
            "--debug",
            action="store_true",
            help="Enable debug logging for detailed output",
        )
        sub.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Enable verbose logging from plugins",
        )

    return parser.parse_args(argv)


def run_command(args: argparse.Namespace) -> int:
    """Execute the requested translation.

    Returns:
        Exit code (0 for success, >0 for errors).
    """
    configure_logging(args.debug, args.verbose)
    logger = logging.getLogger(__name__)

    try:
        document = load_document(args.input_file)

        if args.command == "expand":
            result = expand_document(document, args.block)
        else:
            result = flatten_document(document, args.block)

        content = render_document(result, args.format)
        if args.output_file:
            save_document(content, args.output_file)
        else:
            sys.stdout.write(content)

        logger.info(f"{args.command} of '{args.block}' completed")
        return 0

    except ValidationError as e:
        logger.error(f"Input validation failed: {e}")
        logger.info(f"Suggestion: {e.get_recovery_hint()}")
        return 1
    except RemoteDataError as e:
        logger.error(f"Remote data error: {e}")
        return 2
    except ConfigLoadError as e:
        logger.error(f"Load error: {e}")
        logger.info(f"Suggestion: {e.get_recovery_hint()}")
        return 3
    except AzureRMPluginError as e:
        logger.error(f"AzureRM plugin error: {e}")
        return 4
    except (PermissionError, FileNotFoundError, OSError) as e:
        logger.error(f"File system error: {e}")
        return 8
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        if args.debug:
            logger.exception("Full traceback:")
        return 9


def main(argv: list[str] | None = None) -> int:
    """Entry point for the command line."""
    register_builtin_mappers()
    return run_command(parse_arguments(argv))


if __name__ == "__main__":
    sys.exit(main())

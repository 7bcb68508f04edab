"""Command-line interface for the abbr2markup expansion library.

Expands each abbreviation given on the command line (or read line by line
from standard input) and prints the resulting markup.

Environment Variable Support
----------------------------
Settings can be given as ``ABBR2MARKUP_<OPTION>`` environment variables,
for example ``ABBR2MARKUP_DEFAULT_TAG=section``. Command-line flags always
override environment variables, which override configuration files.

Examples
--------
Expand one abbreviation::

    $ abbr2markup "ul>li.item$*3"

Expand several, one per line on stdin::

    $ printf 'nav>a*2\\ntable>tr*2>td*3\\n' | abbr2markup

Use XHTML void tags and tab indentation::

    $ abbr2markup "p>img+br" --self-closing xhtml --indent "\\t"

Show the expanded tree instead of markup::

    $ abbr2markup "ul>(li>a)*2" --tree

"""

import argparse
import logging
import sys
from dataclasses import fields
from typing import Any, Optional, Sequence

from rich.console import Console

from abbr2markup import __version__
from abbr2markup.api import expand_to_tree
from abbr2markup.cli.config import (
    build_options,
    find_config_in_parents,
    load_config_file,
    load_env_config,
    merge_configs,
)
from abbr2markup.cli.output import build_rich_tree, report_abbreviation_error, report_error
from abbr2markup.exceptions import AbbreviationError, ValidationError
from abbr2markup.logging_utils import configure_logging
from abbr2markup.options import ExpandOptions, MarkupRendererOptions
from abbr2markup.renderers.base import BaseRenderer
from abbr2markup.renderers.json import JsonRenderer
from abbr2markup.renderers.markup import MarkupRenderer

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_ABBREVIATION_ERROR = 6

__all__ = [
    "main",
    "create_parser",
    "get_exit_code_for_exception",
    "EXIT_SUCCESS",
    "EXIT_ERROR",
    "EXIT_VALIDATION_ERROR",
    "EXIT_ABBREVIATION_ERROR",
]


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, AbbreviationError):
        return EXIT_ABBREVIATION_ERROR
    if isinstance(exception, (ValidationError, argparse.ArgumentTypeError)):
        return EXIT_VALIDATION_ERROR
    return EXIT_ERROR


def _field_help(options_class: type, name: str) -> str:
    """Return the help text declared in an options field's metadata."""
    for field in fields(options_class):
        if field.name == name:
            return field.metadata.get("help", "")
    raise KeyError(name)


def _unescape_indent(value: str) -> str:
    """Allow ``\\t`` to be typed literally for --indent."""
    return value.replace("\\t", "\t")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the abbr2markup command.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser. Option flags default to None so that only values
        the user actually gave override configuration files.

    """
    parser = argparse.ArgumentParser(
        prog="abbr2markup",
        description="Expand abbreviations such as 'ul>li.item$*3' into indented markup.",
    )
    parser.add_argument(
        "abbreviations",
        nargs="*",
        metavar="ABBREVIATION",
        help="Abbreviations to expand; reads one per line from stdin when omitted or '-'",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    expansion = parser.add_argument_group("expansion")
    expansion.add_argument("--default-tag", dest="default_tag", help=_field_help(ExpandOptions, "default_tag"))
    expansion.add_argument(
        "--max-nodes",
        dest="max_expanded_nodes",
        type=int,
        help=_field_help(ExpandOptions, "max_expanded_nodes"),
    )

    output = parser.add_argument_group("output")
    output.add_argument("--format", choices=["markup", "json"], help="Output format (default: markup)")
    output.add_argument(
        "--indent",
        dest="indent_unit",
        type=_unescape_indent,
        help=_field_help(MarkupRendererOptions, "indent_unit"),
    )
    output.add_argument(
        "--self-closing",
        dest="self_closing_style",
        choices=["html", "xhtml", "xml"],
        help=_field_help(MarkupRendererOptions, "self_closing_style"),
    )
    output.add_argument(
        "--inline-text-max",
        dest="inline_text_max_length",
        type=int,
        help=_field_help(MarkupRendererOptions, "inline_text_max_length"),
    )
    output.add_argument(
        "--escape-text",
        dest="escape_text",
        action="store_true",
        default=None,
        help=_field_help(MarkupRendererOptions, "escape_text"),
    )
    output.add_argument("--tree", action="store_true", help="Print the expanded element tree instead of markup")

    config = parser.add_argument_group("configuration")
    config.add_argument("--config", help="Path to a configuration file (TOML, YAML or JSON)")
    config.add_argument("--no-config", action="store_true", help="Ignore configuration files")

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", help="Also write log output to this file")
    logging_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    return parser


def _config_from_args(args: argparse.Namespace) -> dict[str, Any]:
    keys = (
        "default_tag",
        "max_expanded_nodes",
        "format",
        "indent_unit",
        "self_closing_style",
        "inline_text_max_length",
        "escape_text",
    )
    return {key: getattr(args, key) for key in keys if getattr(args, key) is not None}


def _load_file_config(args: argparse.Namespace) -> dict[str, Any]:
    if args.no_config:
        return {}
    if args.config:
        return load_config_file(args.config)
    found = find_config_in_parents()
    if found is None:
        return {}
    logger.debug("Using configuration file %s", found)
    return load_config_file(found)


def _collect_abbreviations(arguments: Sequence[str]) -> list[str]:
    if not arguments or list(arguments) == ["-"]:
        return [line.strip() for line in sys.stdin if line.strip()]
    abbreviations: list[str] = []
    for item in arguments:
        if item == "-":
            abbreviations.extend(line.strip() for line in sys.stdin if line.strip())
        else:
            abbreviations.append(item)
    return abbreviations


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the abbr2markup command.

    Parameters
    ----------
    argv : sequence of str, optional
        Arguments without the program name, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Exit code: 0 on success, 1 on an unexpected error, 3 for
        configuration errors, 6 when at least one abbreviation failed to expand

    """
    parser = create_parser()
    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.trace else args.log_level
    configure_logging(log_level, log_file=args.log_file, trace_mode=args.trace)

    err_console = Console(stderr=True)

    try:
        config = merge_configs(_load_file_config(args), load_env_config(), _config_from_args(args))
        expand_options, renderer_options, output_format = build_options(config)
    except (argparse.ArgumentTypeError, ValidationError) as e:
        report_error(err_console, str(e))
        return get_exit_code_for_exception(e)

    renderer: BaseRenderer
    if output_format == "json":
        renderer = JsonRenderer(renderer_options)  # type: ignore[arg-type]
    else:
        renderer = MarkupRenderer(renderer_options)  # type: ignore[arg-type]

    out_console = Console()
    exit_code = EXIT_SUCCESS
    try:
        for abbreviation in _collect_abbreviations(args.abbreviations):
            try:
                nodes = expand_to_tree(abbreviation, expand_options)
            except AbbreviationError as e:
                report_abbreviation_error(err_console, abbreviation, e)
                exit_code = get_exit_code_for_exception(e)
                continue

            if args.tree:
                out_console.print(build_rich_tree(nodes, abbreviation))
            else:
                sys.stdout.write(renderer.render_to_string(nodes) + "\n")
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        report_error(err_console, f"Unexpected error: {e}")
        return get_exit_code_for_exception(e)

    return exit_code

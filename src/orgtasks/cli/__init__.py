"""Command-line interface for the orgtasks library.

This module provides the ``orgtasks`` command, which parses one or more Org
files and prints the tasks and projects found in them together with any
diagnostics.

Configuration
-------------
Options are taken, lowest priority first, from the built-in defaults, a
configuration file, and command-line flags. The configuration file is
``--config PATH``, else the path in ``ORGTASKS_CONFIG``, else the first of
``.orgtasks.toml``, ``.orgtasks.yaml``, ``.orgtasks.yml``, ``.orgtasks.json``
or a ``pyproject.toml`` with a ``[tool.orgtasks]`` table found in the
working directory or its parents, else the same names in the home
directory. ``--no-config`` skips all of them.

Examples
--------
Summarize files::

    $ orgtasks work/inbox.org home/chores.org

Emit JSON::

    $ orgtasks notes/*.org --format json > tasks.json

Add a keyword and treat error diagnostics as failure::

    $ orgtasks inbox.org --keyword STARTED=actionable --strict

Render a table with rich::

    $ orgtasks inbox.org --format table --rich

"""

import argparse
import logging
import sys
from dataclasses import Field, fields
from pathlib import Path
from typing import Any, Optional

from orgtasks.cli.config import env_config_path, load_config_with_priority, options_from_config
from orgtasks.cli.output import print_diagnostics, print_result, should_use_rich_output
from orgtasks.constants import (
    EXIT_FILE_ERROR,
    EXIT_PARSE_ERRORS,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    TASK_STATES,
)
from orgtasks.exceptions import ConfigError, DependencyError, ValidationError
from orgtasks.logging_utils import configure_logging
from orgtasks.options.parser import OrgTaskParserOptions

logger = logging.getLogger(__name__)


def _get_version() -> str:
    try:
        from importlib.metadata import version

        return version("orgtasks")
    except Exception:
        return "unknown"


def parse_keyword_assignment(value: str) -> tuple[str, str]:
    """Parse a ``KEYWORD=state`` command-line value.

    Raises
    ------
    argparse.ArgumentTypeError
        If the value has no ``=`` or names an unknown state

    """
    keyword, sep, state = value.partition("=")
    keyword, state = keyword.strip(), state.strip()
    if not sep or not keyword:
        raise argparse.ArgumentTypeError(f"Expected KEYWORD=STATE, got {value!r}")
    if state not in TASK_STATES:
        raise argparse.ArgumentTypeError(f"Unknown state {state!r}; expected one of {', '.join(TASK_STATES)}")
    return keyword, state


def positive_int(value: str) -> int:
    """Argparse type accepting integers >= 1."""
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got {value!r}") from e
    if number < 1:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got {value!r}")
    return number


def option_cli_fields() -> list[tuple[Field, str]]:
    """Return ``(field, cli_name)`` for the options exposed as flags.

    Only fields whose metadata declares a ``cli_name`` are exposed. Names
    starting with ``no-`` are boolean switches that turn an enabled default
    off; all other names take a string value.
    """
    return [
        (option_field, option_field.metadata["cli_name"])
        for option_field in fields(OrgTaskParserOptions)
        if option_field.metadata.get("cli_name")
    ]


def add_option_arguments(group: argparse._ArgumentGroup) -> None:
    """Add one argument per exposed ``OrgTaskParserOptions`` field."""
    for option_field, cli_name in option_cli_fields():
        help_text = option_field.metadata.get("help", "")
        if cli_name.startswith("no-"):
            group.add_argument(
                f"--{cli_name}",
                dest=option_field.name,
                action="store_false",
                default=None,
                help=f"Disable: {help_text[:1].lower()}{help_text[1:]}",
            )
        else:
            group.add_argument(f"--{cli_name}", dest=option_field.name, default=None, help=help_text)


def create_parser() -> argparse.ArgumentParser:
    """Build the ``orgtasks`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="orgtasks",
        description="Parse Org-mode files into tasks and projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit codes:
  0  success
  1  error diagnostics were reported and --strict was given
  3  invalid arguments or configuration
  4  one or more files could not be read
""",
    )
    parser.add_argument("input", nargs="+", help="Org files to parse")
    parser.add_argument(
        "--format",
        "-f",
        dest="output_format",
        choices=("summary", "json", "table"),
        default="summary",
        help="Output format (default: summary)",
    )

    options_group = parser.add_argument_group("Parser options")
    add_option_arguments(options_group)
    options_group.add_argument(
        "--keyword",
        action="append",
        type=parse_keyword_assignment,
        default=[],
        metavar="KW=STATE",
        help="Recognize an extra state keyword, e.g. STARTED=actionable (repeatable)",
    )
    run_group = parser.add_argument_group("Execution")
    run_group.add_argument("--jobs", "-j", type=positive_int, default=None, help="Number of parallel workers")
    run_group.add_argument("--config", help="Configuration file (TOML, YAML, JSON or pyproject.toml)")
    run_group.add_argument("--no-config", action="store_true", help="Ignore configuration files")
    run_group.add_argument(
        "--strict", action="store_true", help="Exit with status 1 when any error diagnostic is reported"
    )
    run_group.add_argument("--rich", action="store_true", help="Use rich formatting for table output")

    log_group = parser.add_argument_group("Logging")
    log_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    log_group.add_argument("--log-file", help="Also write log output to this file")
    log_group.add_argument("--trace", action="store_true", help="Verbose debug logging with timestamps")

    parser.add_argument("--version", "-V", action="version", version=f"orgtasks {_get_version()}")
    return parser


def build_options(parsed_args: argparse.Namespace) -> OrgTaskParserOptions:
    """Combine configuration file values and command-line flags into options.

    Raises
    ------
    ConfigError
        If the configuration file cannot be loaded or holds invalid options
    ValidationError
        If a command-line value is invalid

    """
    config: dict[str, Any] = {}
    config_path: Optional[Path] = None
    if not parsed_args.no_config:
        config, config_path = load_config_with_priority(parsed_args.config, env_config_path())
    options = options_from_config(config, config_path)

    overrides: dict[str, Any] = {}
    for option_field, _ in option_cli_fields():
        value = getattr(parsed_args, option_field.name, None)
        if value is not None:
            overrides[option_field.name] = value
    if parsed_args.keyword:
        overrides["state_keywords"] = {**options.state_keywords, **dict(parsed_args.keyword)}

    return options.create_updated(**overrides) if overrides else options


def main(args: list[str] | None = None) -> int:
    """Execute the ``orgtasks`` command and return its exit status."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    try:
        options = build_options(parsed_args)
    except (ConfigError, ValidationError) as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        use_rich = parsed_args.output_format == "table" and should_use_rich_output(parsed_args, raise_on_missing=True)
    except DependencyError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    from orgtasks.api import parse_org_files

    unreadable = [path for path in parsed_args.input if not Path(path).is_file()]
    batch = parse_org_files(parsed_args.input, options, max_workers=parsed_args.jobs)

    print_result(batch, parsed_args.output_format, use_rich=use_rich)
    print_diagnostics(batch)

    if unreadable:
        return EXIT_FILE_ERROR
    if parsed_args.strict and batch.has_errors:
        return EXIT_PARSE_ERRORS
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())

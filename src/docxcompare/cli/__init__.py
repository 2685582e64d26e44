#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Command-line interface for docxcompare.

Usage::

    $ docxcompare expected.docx actual.docx
    $ docxcompare --semantic-review --reviewer text expected.docx actual.docx

Exit codes
----------
- 0: documents are identical, or equivalent according to the reviewer
- 1: differences found
- 2: unexpected error
- 3: missing optional dependency for the selected reviewer
- 4: invalid option or configuration value
- 5: input file missing or unreadable
- 6: input is not a valid zip container
- 7: semantic reviewer unavailable or failed

All options can be given defaults through environment variables
(``DOCXCOMPARE_<OPTION>``) or a configuration file, see
:mod:`docxcompare.config`.
"""

from __future__ import annotations

import argparse
import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from docxcompare import __version__
from docxcompare.cli.actions import (
    EnvironmentAwareAction,
    EnvironmentAwareBooleanAction,
    EnvironmentAwareBooleanFalseAction,
    PositiveIntAction,
    env_key_for,
)
from docxcompare.cli.output import print_discrepancies, should_use_rich_output
from docxcompare.config import load_config
from docxcompare.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REVIEWER,
    EXIT_ARCHIVE_ERROR,
    EXIT_DEPENDENCY_ERROR,
    EXIT_DIFFERENT,
    EXIT_ERROR,
    EXIT_EXTERNAL_TOOL_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    LOG_LEVELS,
    REVIEWER_NAMES,
)
from docxcompare.engine import CompareResult, CompareVerdict, compare
from docxcompare.exceptions import (
    ArchiveFormatError,
    DependencyError,
    ExternalToolError,
    FileAccessError,
    FileError,
    ValidationError,
)
from docxcompare.logging_utils import configure_logging
from docxcompare.review import get_reviewer

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the docxcompare command."""
    parser = argparse.ArgumentParser(
        prog="docxcompare",
        description="Compare docx document content: byte equality, then zip entries, then optional semantic review.",
        epilog="Exit codes: 0 documents are equal, 1 differences found, 2-7 comparison could not be completed.",
    )

    parser.add_argument("expected", help="Expected (reference) document")
    parser.add_argument("actual", help="Actual document to check")

    review_group = parser.add_argument_group("Semantic review")
    review_group.add_argument(
        "--semantic-review",
        "--word-diff",
        dest="semantic_review",
        action=EnvironmentAwareBooleanAction,
        help="Consider documents equal if the reviewer finds no revisions comparing them",
    )
    review_group.add_argument(
        "--reviewer",
        dest="reviewer",
        action=EnvironmentAwareAction,
        choices=REVIEWER_NAMES,
        default=DEFAULT_REVIEWER,
        help="Reviewer used for semantic review: auto (default), word (Microsoft Word), text (python-docx)",
    )
    review_group.add_argument(
        "--no-replace",
        dest="replace_expected",
        action=EnvironmentAwareBooleanFalseAction,
        help="Keep the expected document when the reviewer judges the content equivalent",
    )

    compare_group = parser.add_argument_group("Comparison")
    compare_group.add_argument(
        "--chunk-size",
        dest="chunk_size",
        action=PositiveIntAction,
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Bytes read per comparison step (default: {DEFAULT_CHUNK_SIZE})",
    )
    compare_group.add_argument(
        "--list-discrepancies",
        dest="list_discrepancies",
        action=EnvironmentAwareBooleanAction,
        help="Print every differing archive entry when documents do not match",
    )

    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument("--config", help="Configuration file (.toml, .yaml, .json, or pyproject.toml)")
    config_group.add_argument("--no-config", action="store_true", help="Ignore configuration files")

    output_group = parser.add_argument_group("Output and logging")
    output_group.add_argument(
        "--log-level",
        dest="log_level",
        action=EnvironmentAwareAction,
        type=str.upper,
        choices=LOG_LEVELS,
        default=DEFAULT_LOG_LEVEL,
        help=f"Logging level (default: {DEFAULT_LOG_LEVEL})",
    )
    output_group.add_argument("--log-file", dest="log_file", action=EnvironmentAwareAction, help="Also log to file")
    output_group.add_argument(
        "--trace", dest="trace", action=EnvironmentAwareBooleanAction, help="Timestamps and logger names in logs"
    )
    output_group.add_argument(
        "--rich", dest="rich", action=EnvironmentAwareBooleanAction, help="Use rich terminal output"
    )
    output_group.add_argument(
        "--force-rich", dest="force_rich", action="store_true", help="Use rich output even when not a terminal"
    )
    output_group.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def _parse_config_location(argv: list[str]) -> argparse.Namespace:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("--config")
    pre_parser.add_argument("--no-config", action="store_true")
    known, _ = pre_parser.parse_known_args(argv)
    return known


def apply_config_defaults(parser: argparse.ArgumentParser, config: Dict[str, Any]) -> None:
    """Use configuration values as defaults unless the environment overrides them."""
    defaults = {key: value for key, value in config.items() if env_key_for(key) not in os.environ}
    if defaults:
        parser.set_defaults(**defaults)


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to a CLI exit code distinct from 'differences found'."""
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR

    if isinstance(exception, ExternalToolError):
        return EXIT_EXTERNAL_TOOL_ERROR

    if isinstance(exception, ArchiveFormatError):
        return EXIT_ARCHIVE_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    return EXIT_ERROR


def replace_expected(expected: Path, actual: Path) -> None:
    """Overwrite the expected document with the actual one."""
    try:
        shutil.copyfile(actual, expected)
    except OSError as e:
        raise FileAccessError(
            str(expected), message=f"Cannot replace {expected} with {actual}: {e}", original_error=e
        ) from e


def report_result(result: CompareResult, args: argparse.Namespace) -> int:
    """Print the outcome of a comparison and return the exit code."""
    if result.verdict is CompareVerdict.IDENTICAL_BYTES:
        print("Document content is identical")
        return EXIT_SUCCESS

    if result.verdict is CompareVerdict.EQUIVALENT_CONTENT:
        if args.replace_expected:
            print("Document content is not identical, but the reviewer found no changes, replacing expected by actual")
            replace_expected(Path(args.expected), Path(args.actual))
        else:
            print("Document content is not identical, but the reviewer found no changes, keeping expected")
        return EXIT_SUCCESS

    print("Document content does not match")
    if result.diff_artifact_path is not None:
        print(f"Differences between documents are stored as: {result.diff_artifact_path}")
    if args.list_discrepancies and result.discrepancies:
        print_discrepancies(result.discrepancies, use_rich=should_use_rich_output(args))
    return EXIT_DIFFERENT


def main(argv: Optional[list[str]] = None) -> int:
    """Run the docxcompare command line.

    Parameters
    ----------
    argv : list[str], optional
        Command line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    argv = sys.argv[1:] if argv is None else argv

    location = _parse_config_location(argv)
    try:
        config = load_config(location.config, no_config=location.no_config)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    parser = create_parser()
    apply_config_defaults(parser, config)
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        if e.code in (0, None):
            return EXIT_SUCCESS
        return EXIT_VALIDATION_ERROR

    configure_logging(args.log_level, log_file=args.log_file, trace_mode=args.trace)
    logger.debug("Comparing %s against %s", args.actual, args.expected)

    try:
        reviewer = get_reviewer(args.reviewer) if args.semantic_review else None
        result = compare(
            args.expected,
            args.actual,
            request_semantic_review=args.semantic_review,
            reviewer=reviewer,
            chunk_size=args.chunk_size,
        )
        return report_result(result, args)
    except Exception as e:
        print(f"Error comparing documents: {e}", file=sys.stderr)
        logger.debug("Comparison failed", exc_info=True)
        return get_exit_code_for_exception(e)


__all__ = ["create_parser", "get_exit_code_for_exception", "main"]

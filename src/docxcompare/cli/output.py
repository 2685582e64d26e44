"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/docxcompare/cli/output.py
from __future__ import annotations

import argparse
import sys
from typing import IO, Iterable

from docxcompare.archive import EntryDiscrepancy


def check_rich_available() -> bool:
    """Check if Rich library is available."""
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def should_use_rich_output(args: argparse.Namespace, stream: IO[str] | None = None) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Rich output is used when ``--rich`` is set, Rich is installed, and either
    ``--force-rich`` is set or the output stream is a terminal.
    """
    if not getattr(args, "rich", False) or not check_rich_available():
        return False

    if getattr(args, "force_rich", False):
        return True

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    return bool(callable(isatty) and isatty())


def print_discrepancies(
    discrepancies: Iterable[EntryDiscrepancy], use_rich: bool = False, stream: IO[str] | None = None
) -> None:
    """Print archive discrepancies as plain lines or a Rich table."""
    target = stream or sys.stdout
    items = list(discrepancies)

    if not use_rich:
        for discrepancy in items:
            print(f"  {discrepancy}", file=target)
        return

    from rich.console import Console
    from rich.table import Table

    table = Table(title=f"Archive discrepancies ({len(items)})")
    table.add_column("Entry", style="cyan", no_wrap=True)
    table.add_column("Reason", style="yellow")
    table.add_column("Details", style="white")
    for discrepancy in items:
        table.add_row(discrepancy.entry_path, discrepancy.reason.name, discrepancy.description)

    Console(file=target).print(table)

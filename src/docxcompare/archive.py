#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docxcompare/archive.py
"""Entry-by-entry comparison of zip-format document packages.

A DOCX (or any OOXML/ODF package) is a zip archive of named parts. When two
packages are not byte-identical, :func:`diff_archives` localizes the
difference: which parts exist on only one side, and which shared parts
differ in length or content. Only entry names, uncompressed lengths and
entry bytes are looked at; timestamps, permissions and compression methods
are ignored.

Examples
--------
List every difference:
    >>> from docxcompare.archive import diff_archives
    >>> for discrepancy in diff_archives("expected.docx", "actual.docx"):
    ...     print(discrepancy)

Stop at the first one:
    >>> has_differences = next(diff_archives("expected.docx", "actual.docx"), None) is not None

"""

from __future__ import annotations

import enum
import logging
import os
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import IO, Iterator

from docxcompare.constants import DEFAULT_CHUNK_SIZE
from docxcompare.exceptions import ArchiveFormatError, FileAccessError, NotFoundError
from docxcompare.streams import streams_equal

logger = logging.getLogger(__name__)


class DiscrepancyReason(enum.Enum):
    """Why an archive entry was reported as a discrepancy."""

    MISSING_IN_ACTUAL = "missing_in_actual"
    MISSING_IN_EXPECTED = "missing_in_expected"
    LENGTH_MISMATCH = "length_mismatch"
    CONTENT_MISMATCH = "content_mismatch"


@dataclass(frozen=True)
class EntryDiscrepancy:
    """A single difference between the entries of two archives.

    Attributes
    ----------
    entry_path : str
        Full entry name inside the archive
    reason : DiscrepancyReason
        Kind of difference
    expected_length : int or None
        Uncompressed length in the expected archive (length mismatches only)
    actual_length : int or None
        Uncompressed length in the actual archive (length mismatches only)

    """

    entry_path: str
    reason: DiscrepancyReason
    expected_length: int | None = None
    actual_length: int | None = None

    def __post_init__(self) -> None:
        """Ensure lengths are present exactly when the reason needs them."""
        has_lengths = self.expected_length is not None and self.actual_length is not None
        if self.reason is DiscrepancyReason.LENGTH_MISMATCH and not has_lengths:
            raise ValueError("LENGTH_MISMATCH requires expected_length and actual_length")
        if self.reason is not DiscrepancyReason.LENGTH_MISMATCH and (
            self.expected_length is not None or self.actual_length is not None
        ):
            raise ValueError(f"{self.reason.name} does not carry entry lengths")

    @property
    def description(self) -> str:
        """Human-readable explanation of the discrepancy."""
        if self.reason is DiscrepancyReason.MISSING_IN_ACTUAL:
            return "File present in expected, not in actual"
        if self.reason is DiscrepancyReason.MISSING_IN_EXPECTED:
            return "File present in actual, not in expected"
        if self.reason is DiscrepancyReason.LENGTH_MISMATCH:
            return f"Different Length: {self.expected_length} vs. {self.actual_length}"
        return "Content differs"

    def __str__(self) -> str:
        return f"{self.entry_path}: {self.description}"


class EntryStream:
    """Readable stream over one archive entry.

    Decompression and CRC failures surface while reading, so they are
    reported here against the archive the entry belongs to.
    """

    def __init__(self, raw: IO[bytes], name: str, archive_path: Path):
        self._raw = raw
        self.name = name
        self.archive_path = archive_path

    def read(self, size: int = -1) -> bytes:
        try:
            return self._raw.read(size)
        except (zipfile.BadZipFile, zlib.error, EOFError) as e:
            raise ArchiveFormatError(
                f"Corrupt entry {self.name!r} in {self.archive_path}: {e}",
                file_path=str(self.archive_path),
                original_error=e,
            ) from e

    def close(self) -> None:
        self._raw.close()

    def __enter__(self) -> EntryStream:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


class ArchivePackage:
    """Read-only view over a zip container.

    Entry names are kept in the archive's own order. If an archive holds the
    same name more than once, the first occurrence is the one compared.
    Use as a context manager so the underlying file is always closed.

    Parameters
    ----------
    path : str or PathLike
        Path to the container file

    Raises
    ------
    NotFoundError
        If the path does not exist
    FileAccessError
        If the file cannot be read
    ArchiveFormatError
        If the file is not a valid zip archive

    """

    def __init__(self, path: str | os.PathLike[str]):
        """Open the archive and index its entries."""
        self.path = Path(path)
        try:
            self._zip = zipfile.ZipFile(self.path, "r")
        except FileNotFoundError as e:
            raise NotFoundError(str(self.path), original_error=e) from e
        except zipfile.BadZipFile as e:
            raise ArchiveFormatError(
                f"Invalid zip archive {self.path}: {e}", file_path=str(self.path), original_error=e
            ) from e
        except OSError as e:
            raise FileAccessError(str(self.path), original_error=e) from e

        self._entries: dict[str, zipfile.ZipInfo] = {}
        for info in self._zip.infolist():
            self._entries.setdefault(info.filename, info)

    @property
    def names(self) -> list[str]:
        """Entry names in archive order."""
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def entry_length(self, name: str) -> int:
        """Return the uncompressed length of an entry."""
        return self._entries[name].file_size

    def open_entry(self, name: str) -> EntryStream:
        """Open an entry for reading its uncompressed bytes.

        Raises
        ------
        ArchiveFormatError
            If the entry is encrypted or uses an unsupported compression
            method or header

        """
        try:
            return EntryStream(self._zip.open(self._entries[name], "r"), name, self.path)
        except (zipfile.BadZipFile, NotImplementedError, RuntimeError) as e:
            raise ArchiveFormatError(
                f"Cannot open entry {name!r} in {self.path}: {e}", file_path=str(self.path), original_error=e
            ) from e

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> ArchivePackage:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


def _entries_equal(expected: ArchivePackage, actual: ArchivePackage, name: str, chunk_size: int) -> bool:
    with expected.open_entry(name) as expected_stream, actual.open_entry(name) as actual_stream:
        return streams_equal(expected_stream, actual_stream, chunk_size)


def diff_archives(
    expected_path: str | os.PathLike[str],
    actual_path: str | os.PathLike[str],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Iterator[EntryDiscrepancy]:
    """Yield every entry-level difference between two zip archives.

    Discrepancies are produced lazily, in a fixed order:

    1. entries missing from ``actual``, in the expected archive's order
    2. entries missing from ``expected``, in the actual archive's order
    3. length or content mismatches, in the expected archive's order

    A shared entry whose lengths differ is reported as a length mismatch and
    its content is not read. Entry names are compared case-sensitively with
    no normalization.

    Both archives are opened when iteration starts and closed when it ends,
    fails, or the generator is closed early, so partial consumption such as
    ``next(diff_archives(a, b), None)`` is cheap and leaks nothing.

    Parameters
    ----------
    expected_path : str or PathLike
        Reference archive
    actual_path : str or PathLike
        Archive under test
    chunk_size : int, default 4096
        Read size for per-entry content comparison

    Yields
    ------
    EntryDiscrepancy
        One item per difference found

    Raises
    ------
    NotFoundError
        If either path does not exist
    FileAccessError
        If either file cannot be read
    ArchiveFormatError
        If either file is not a valid zip archive, or an entry is corrupt or
        encrypted. The error names the archive at fault in ``file_path``.

    """
    with ArchivePackage(expected_path) as expected, ArchivePackage(actual_path) as actual:
        expected_names = expected.names
        actual_names = actual.names
        logger.debug(
            "Diffing %s (%d entries) against %s (%d entries)", expected.path, len(expected), actual.path, len(actual)
        )

        for name in expected_names:
            if name not in actual:
                yield EntryDiscrepancy(name, DiscrepancyReason.MISSING_IN_ACTUAL)

        for name in actual_names:
            if name not in expected:
                yield EntryDiscrepancy(name, DiscrepancyReason.MISSING_IN_EXPECTED)

        for name in expected_names:
            if name not in actual:
                continue

            expected_length = expected.entry_length(name)
            actual_length = actual.entry_length(name)
            if expected_length != actual_length:
                yield EntryDiscrepancy(
                    name,
                    DiscrepancyReason.LENGTH_MISMATCH,
                    expected_length=expected_length,
                    actual_length=actual_length,
                )
                continue

            if not _entries_equal(expected, actual, name, chunk_size):
                yield EntryDiscrepancy(name, DiscrepancyReason.CONTENT_MISMATCH)


__all__ = ["ArchivePackage", "DiscrepancyReason", "EntryDiscrepancy", "diff_archives"]

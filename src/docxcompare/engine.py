#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docxcompare/engine.py
"""Comparison decision engine.

:func:`compare` escalates in three steps and stops at the first that
settles the question:

1. Whole-file byte equality (:func:`docxcompare.streams.files_equal`).
2. Entry-by-entry archive diff (:func:`docxcompare.archive.diff_archives`).
   If no entry differs the documents are treated as identical even though
   the container bytes are not, since only zip-level metadata or ordering
   can account for that.
3. Optionally, a semantic reviewer decides whether the entry differences
   matter to a reader.

All failures propagate to the caller. Nothing here writes to the inputs;
replacing the expected document after an equivalent verdict is left to the
caller (see :mod:`docxcompare.cli`).
"""

from __future__ import annotations

import enum
import itertools
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from docxcompare.archive import EntryDiscrepancy, diff_archives
from docxcompare.constants import DEFAULT_CHUNK_SIZE
from docxcompare.review import SemanticReviewer, get_reviewer
from docxcompare.streams import files_equal
from docxcompare.utils.decorators import debug_timer

logger = logging.getLogger(__name__)


class CompareVerdict(enum.Enum):
    """Outcome of comparing two document packages."""

    IDENTICAL_BYTES = "identical_bytes"
    """The files match byte for byte, or every archive entry does."""

    EQUIVALENT_CONTENT = "equivalent_content"
    """Entries differ but the semantic reviewer found no meaningful change."""

    DIFFERENT = "different"
    """Entries differ and no semantic review overrode that."""

    @property
    def is_success(self) -> bool:
        return self is not CompareVerdict.DIFFERENT


@dataclass(frozen=True)
class CompareResult:
    """Verdict plus the evidence gathered while reaching it.

    Attributes
    ----------
    verdict : CompareVerdict
        The tri-state outcome
    diff_artifact_path : Path or None
        Difference document produced by the semantic reviewer, only set for
        a DIFFERENT verdict reached through review
    discrepancies : tuple of EntryDiscrepancy
        Archive discrepancies that were materialized. Without semantic
        review this is the full list; with review only the first one is
        read, since the reviewer takes over from there.

    """

    verdict: CompareVerdict
    diff_artifact_path: Path | None = None
    discrepancies: tuple[EntryDiscrepancy, ...] = ()

    @property
    def is_success(self) -> bool:
        return self.verdict.is_success


def compare(
    expected_path: str | os.PathLike[str],
    actual_path: str | os.PathLike[str],
    request_semantic_review: bool = False,
    reviewer: SemanticReviewer | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> CompareResult:
    """Compare an actual document package against an expected one.

    Parameters
    ----------
    expected_path : str or PathLike
        Reference document
    actual_path : str or PathLike
        Document under test
    request_semantic_review : bool, default False
        Ask a semantic reviewer to judge entry-level differences
    reviewer : SemanticReviewer, optional
        Reviewer to use; defaults to ``get_reviewer("auto")`` when a review
        is requested
    chunk_size : int, default 4096
        Read size for byte comparisons

    Returns
    -------
    CompareResult
        Verdict, optional diff artifact path, and the discrepancies read

    Raises
    ------
    NotFoundError
        If either path does not exist
    FileAccessError
        If either file cannot be read
    ArchiveFormatError
        If the files differ and either is not a valid zip archive
    ExternalToolError
        If the semantic reviewer is unavailable or fails

    Examples
    --------
        >>> result = compare("expected.docx", "actual.docx")
        >>> result.verdict
        <CompareVerdict.IDENTICAL_BYTES: 'identical_bytes'>

    """
    with debug_timer(logger, "Whole-file comparison"):
        same_bytes = files_equal(expected_path, actual_path, chunk_size)
    if same_bytes:
        logger.debug("%s and %s are byte-identical", expected_path, actual_path)
        return CompareResult(CompareVerdict.IDENTICAL_BYTES)

    discrepancies = diff_archives(expected_path, actual_path, chunk_size)
    try:
        with debug_timer(logger, "Archive diff"):
            if request_semantic_review:
                found = tuple(itertools.islice(discrepancies, 1))
            else:
                found = tuple(discrepancies)
    finally:
        discrepancies.close()

    if not found:
        logger.info(
            "%s and %s differ at the container level but every entry is identical", expected_path, actual_path
        )
        return CompareResult(CompareVerdict.IDENTICAL_BYTES)

    logger.debug("First archive discrepancy: %s", found[0])
    if not request_semantic_review:
        return CompareResult(CompareVerdict.DIFFERENT, discrepancies=found)

    if reviewer is None:
        reviewer = get_reviewer("auto")
    with debug_timer(logger, "Semantic review"):
        outcome = reviewer.review_semantically(expected_path, actual_path)

    if outcome.is_equivalent:
        return CompareResult(CompareVerdict.EQUIVALENT_CONTENT, discrepancies=found)
    return CompareResult(CompareVerdict.DIFFERENT, diff_artifact_path=outcome.diff_artifact_path, discrepancies=found)


class DocxCompare:
    """Stateful comparison facade.

    Keeps the reviewer choice between calls and remembers the diff artifact
    produced by the most recent comparison.

    Parameters
    ----------
    use_reviewer : bool, default False
        Request a semantic review when archive entries differ
    reviewer : SemanticReviewer, optional
        Reviewer to use; chosen automatically when omitted
    chunk_size : int, default 4096
        Read size for byte comparisons

    """

    def __init__(
        self,
        use_reviewer: bool = False,
        reviewer: SemanticReviewer | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self.use_reviewer = use_reviewer
        self.reviewer = reviewer
        self.chunk_size = chunk_size
        self._last_result: CompareResult | None = None

    @property
    def diff_file(self) -> Path | None:
        """Diff artifact from the last comparison, if one was produced."""
        return self._last_result.diff_artifact_path if self._last_result else None

    @property
    def last_result(self) -> CompareResult | None:
        return self._last_result

    def are_equal(self, expected_path: str | os.PathLike[str], actual_path: str | os.PathLike[str]) -> CompareVerdict:
        """Compare two documents and return only the verdict."""
        self._last_result = None
        self._last_result = compare(
            expected_path,
            actual_path,
            request_semantic_review=self.use_reviewer,
            reviewer=self.reviewer,
            chunk_size=self.chunk_size,
        )
        return self._last_result.verdict


__all__ = ["CompareResult", "CompareVerdict", "DocxCompare", "compare"]

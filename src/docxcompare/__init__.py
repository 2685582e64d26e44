#  Copyright (c) 2025 Tom Villani, Ph.D.
"""docxcompare - decide whether two document packages have the same content.

A DOCX file is a zip archive of XML parts. Two files produced from the same
content are often not byte-identical (timestamps, zip ordering, rsids), so
docxcompare escalates through three checks and stops at the first that
settles the question:

1. Whole-file byte comparison, short-circuiting on a size mismatch.
2. Entry-by-entry comparison of the two zip archives, reporting entries
   missing on either side and entries whose length or bytes differ.
3. Optionally, a semantic reviewer (Microsoft Word, or a portable text
   comparison built on python-docx) that judges whether the differences
   matter and renders a marked-up difference document when they do.

Examples
--------
Compare two documents:
    >>> from docxcompare import compare, CompareVerdict
    >>> result = compare("expected.docx", "actual.docx")
    >>> result.verdict is CompareVerdict.IDENTICAL_BYTES
    True

Ask a reviewer about entry-level differences:
    >>> result = compare("expected.docx", "actual.docx", request_semantic_review=True)
    >>> result.diff_artifact_path
    PosixPath('/work/actual.diff.docx')

List the differing archive entries:
    >>> from docxcompare import diff_archives
    >>> for discrepancy in diff_archives("expected.docx", "actual.docx"):
    ...     print(discrepancy)
    word/document.xml: Content differs

"""

import sys

if sys.version_info < (3, 10):
    raise RuntimeError(
        "docxcompare requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from docxcompare.archive import ArchivePackage, DiscrepancyReason, EntryDiscrepancy, diff_archives  # noqa: E402
from docxcompare.engine import CompareResult, CompareVerdict, DocxCompare, compare  # noqa: E402
from docxcompare.exceptions import (  # noqa: E402
    ArchiveFormatError,
    DependencyError,
    DocxCompareError,
    ExternalToolError,
    FileAccessError,
    FileError,
    NotFoundError,
    ValidationError,
)
from docxcompare.review import ReviewOutcome, SemanticReviewer, TextReviewer, WordReviewer, get_reviewer  # noqa: E402
from docxcompare.streams import files_equal, streams_equal  # noqa: E402

__all__ = [
    "__version__",
    # Comparison
    "compare",
    "files_equal",
    "streams_equal",
    "diff_archives",
    "ArchivePackage",
    "CompareResult",
    "CompareVerdict",
    "DiscrepancyReason",
    "DocxCompare",
    "EntryDiscrepancy",
    # Review
    "ReviewOutcome",
    "SemanticReviewer",
    "TextReviewer",
    "WordReviewer",
    "get_reviewer",
    # Exceptions
    "ArchiveFormatError",
    "DependencyError",
    "DocxCompareError",
    "ExternalToolError",
    "FileAccessError",
    "FileError",
    "NotFoundError",
    "ValidationError",
]

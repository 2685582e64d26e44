#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docxcompare/review/word.py
"""Semantic review by automating Microsoft Word over COM.

Word's own document comparison is the reference for whether two DOCX files
differ in a way a reader would notice. The expected document is opened,
compared in place against the actual one, and the resulting tracked
revisions are counted across the body and every section's headers and
footers. When revisions exist the marked-up document is saved next to the
actual file as ``<name>.diff.docx``.

Requires Windows, an installed copy of Word, and ``pywin32``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from docxcompare.constants import REVIEW_AUTHOR
from docxcompare.exceptions import ExternalToolError
from docxcompare.review.base import ReviewOutcome, diff_artifact_path
from docxcompare.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

DEPS_WORD = [("pywin32", "win32com.client", ""), ("pywin32", "pythoncom", "")]

# Word enumeration values (WdCompareTarget, WdSaveOptions)
WD_COMPARE_TARGET_CURRENT = 1
WD_DO_NOT_SAVE_CHANGES = 0


def count_revisions(document: Any) -> int:
    """Count tracked revisions in a compared Word document.

    Revisions in headers and footers are not part of ``Document.Revisions``,
    so each section's ranges are counted as well.
    """
    total = document.Revisions.Count
    for section in document.Sections:
        total += section.Range.Revisions.Count
        for header in section.Headers:
            total += header.Range.Revisions.Count
        for footer in section.Footers:
            total += footer.Range.Revisions.Count
    return total


class WordReviewer:
    """Semantic reviewer backed by Microsoft Word.

    Parameters
    ----------
    visible : bool, default False
        Show the Word window while comparing (useful when debugging)

    """

    name = "word"

    def __init__(self, visible: bool = False):
        self.visible = visible

    @requires_dependencies("word", DEPS_WORD)
    def review_semantically(
        self, expected_path: str | os.PathLike[str], actual_path: str | os.PathLike[str]
    ) -> ReviewOutcome:
        """Compare two documents with Word and count the revisions it finds.

        Raises
        ------
        DependencyError
            If pywin32 is not installed
        ExternalToolError
            If Word cannot be started or the comparison fails

        """
        import pythoncom
        import win32com.client

        expected = Path(expected_path).resolve()
        actual = Path(actual_path).resolve()

        pythoncom.CoInitialize()
        word_app = None
        expected_doc = None
        try:
            word_app = win32com.client.DispatchEx("Word.Application")
            word_app.Visible = self.visible
            word_app.DisplayAlerts = 0

            logger.debug("Opening %s in Word", expected)
            expected_doc = word_app.Documents.Open(str(expected))
            expected_doc.Compare(
                str(actual),
                REVIEW_AUTHOR,
                WD_COMPARE_TARGET_CURRENT,
                True,  # DetectFormatChanges
                True,  # IgnoreAllComparisonWarnings
                False,  # AddToRecentFiles
                False,  # RemovePersonalInformation
                False,  # RemoveDateAndTime
            )

            revisions = count_revisions(expected_doc)
            logger.debug("Word found %d revision(s)", revisions)
            if revisions == 0:
                return ReviewOutcome(0)

            artifact = diff_artifact_path(actual)
            expected_doc.TrackRevisions = True
            expected_doc.SaveAs2(str(artifact))
            return ReviewOutcome(revisions, artifact)

        except pythoncom.com_error as e:
            raise ExternalToolError(f"Word comparison failed: {e}", tool_name=self.name, original_error=e) from e

        finally:
            try:
                if expected_doc is not None:
                    expected_doc.Close(WD_DO_NOT_SAVE_CHANGES)
            finally:
                try:
                    if word_app is not None:
                        word_app.Quit(WD_DO_NOT_SAVE_CHANGES)
                finally:
                    pythoncom.CoUninitialize()


__all__ = ["WordReviewer", "count_revisions"]

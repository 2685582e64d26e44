#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docxcompare/review/__init__.py
"""Semantic reviewers for documents whose packages differ at the byte level.

The comparison engine only depends on :class:`SemanticReviewer`, a
protocol with a single ``review_semantically`` method. Two implementations
ship with the package:

- :class:`WordReviewer` drives Microsoft Word over COM (Windows, pywin32)
- :class:`TextReviewer` compares visible text with python-docx (portable)

Examples
--------
    >>> from docxcompare.review import get_reviewer
    >>> outcome = get_reviewer("text").review_semantically("expected.docx", "actual.docx")
    >>> outcome.revision_count
    0

"""

from __future__ import annotations

import importlib.util
import logging
import sys

from docxcompare.constants import REVIEWER_NAMES
from docxcompare.exceptions import ValidationError
from docxcompare.review.base import ReviewOutcome, SemanticReviewer, diff_artifact_path
from docxcompare.review.text import TextReviewer
from docxcompare.review.word import WordReviewer

logger = logging.getLogger(__name__)


def _word_available() -> bool:
    return sys.platform == "win32" and importlib.util.find_spec("win32com") is not None


def get_reviewer(name: str = "auto") -> SemanticReviewer:
    """Return a semantic reviewer by name.

    Parameters
    ----------
    name : {"auto", "word", "text"}, default "auto"
        ``"auto"`` picks Word when running on Windows with pywin32
        installed and the text reviewer otherwise.

    Raises
    ------
    ValidationError
        If ``name`` is not a known reviewer

    """
    if name not in REVIEWER_NAMES:
        raise ValidationError(
            f"Unknown reviewer {name!r}. Must be one of: {', '.join(REVIEWER_NAMES)}",
            parameter_name="reviewer",
            parameter_value=name,
        )
    if name == "auto":
        name = "word" if _word_available() else "text"
        logger.debug("Selected %s reviewer", name)
    if name == "word":
        return WordReviewer()
    return TextReviewer()


__all__ = [
    "ReviewOutcome",
    "SemanticReviewer",
    "TextReviewer",
    "WordReviewer",
    "diff_artifact_path",
    "get_reviewer",
]

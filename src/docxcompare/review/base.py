#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docxcompare/review/base.py
"""Interface between the comparison engine and semantic reviewers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from docxcompare.constants import DIFF_ARTIFACT_SUFFIX


@dataclass(frozen=True)
class ReviewOutcome:
    """Result of a semantic review.

    Attributes
    ----------
    revision_count : int
        Number of meaningful changes the reviewer found. Zero means the two
        documents are judged equivalent.
    diff_artifact_path : Path or None
        Rendered difference document. Always None when ``revision_count``
        is zero.

    """

    revision_count: int
    diff_artifact_path: Path | None = None

    def __post_init__(self) -> None:
        if self.revision_count < 0:
            raise ValueError(f"revision_count must be non-negative, got {self.revision_count}")
        if self.revision_count == 0 and self.diff_artifact_path is not None:
            raise ValueError("An equivalent review must not produce a diff artifact")

    @property
    def is_equivalent(self) -> bool:
        return self.revision_count == 0


@runtime_checkable
class SemanticReviewer(Protocol):
    """Judges whether byte-level differences between two documents matter.

    Implementations own the full lifecycle of whatever they drive (an
    external application, a parser) and must release it on every exit path.
    """

    def review_semantically(
        self, expected_path: str | os.PathLike[str], actual_path: str | os.PathLike[str]
    ) -> ReviewOutcome:
        """Review ``actual_path`` against ``expected_path``."""
        ...


def diff_artifact_path(actual_path: str | os.PathLike[str]) -> Path:
    """Return where a reviewer writes its difference document.

    The artifact sits next to the actual document, e.g. ``out/report.docx``
    becomes ``out/report.diff.docx``.
    """
    actual = Path(actual_path).resolve()
    return actual.with_name(actual.stem + DIFF_ARTIFACT_SUFFIX)

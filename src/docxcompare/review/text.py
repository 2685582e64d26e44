#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docxcompare/review/text.py
"""Portable semantic review based on the visible text of two DOCX files.

Where Word is not available, the text a reader sees is a reasonable proxy
for "content": body paragraphs and table rows in document order, followed
by each section's own header and footer. Two documents whose packages
differ only in metadata, rsids, or zip layout produce the same lines and are
judged equivalent. Otherwise every changed run of lines counts as one
revision, and a marked-up ``.diff.docx`` is written with python-docx.
"""

from __future__ import annotations

import difflib
import logging
import os
import zipfile
from pathlib import Path
from typing import Any, Iterator

from docxcompare.exceptions import ExternalToolError
from docxcompare.review.base import ReviewOutcome, diff_artifact_path
from docxcompare.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

DEPS_TEXT = [("python-docx", "docx", ">=1.1.0")]

DELETED_COLOR = (0xC0, 0x00, 0x00)
INSERTED_COLOR = (0x00, 0x44, 0xCC)


def _iter_block_text(parent: Any) -> Iterator[str]:
    """Yield one line per paragraph and per table row, in document order."""
    import docx.document
    from docx.oxml.ns import qn
    from docx.table import Table
    from docx.text.paragraph import Paragraph

    parent_elm = parent.element.body if isinstance(parent, docx.document.Document) else parent._element

    for child in parent_elm.iterchildren():
        if child.tag == qn("w:p"):
            yield Paragraph(child, parent).text
        elif child.tag == qn("w:tbl"):
            for row in Table(child, parent).rows:
                yield " | ".join(cell.text for cell in row.cells)


def extract_lines(path: str | os.PathLike[str]) -> list[str]:
    """Extract comparable text lines from a DOCX document.

    Raises
    ------
    ExternalToolError
        If the document cannot be loaded by python-docx

    """
    import docx
    from docx.opc.exceptions import PackageNotFoundError

    try:
        document = docx.Document(str(path))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError, OSError) as e:
        raise ExternalToolError(
            f"Cannot load {path} as a Word document: {e}", tool_name="text", original_error=e
        ) from e

    lines = list(_iter_block_text(document))
    for index, section in enumerate(document.sections, start=1):
        for label, part in (("header", section.header), ("footer", section.footer)):
            if part.is_linked_to_previous:
                continue
            lines.extend(f"[section {index} {label}] {p.text}" for p in part.paragraphs)
    return lines


class TextReviewer:
    """Semantic reviewer comparing the visible text of two DOCX files."""

    name = "text"

    @requires_dependencies("text", DEPS_TEXT)
    def review_semantically(
        self, expected_path: str | os.PathLike[str], actual_path: str | os.PathLike[str]
    ) -> ReviewOutcome:
        """Compare extracted text and render a marked-up diff when it differs.

        Raises
        ------
        DependencyError
            If python-docx is not installed
        ExternalToolError
            If either document cannot be loaded or the artifact cannot be written

        """
        expected_lines = extract_lines(expected_path)
        actual_lines = extract_lines(actual_path)

        matcher = difflib.SequenceMatcher(None, expected_lines, actual_lines, autojunk=False)
        opcodes = matcher.get_opcodes()
        revisions = sum(1 for tag, *_ in opcodes if tag != "equal")
        logger.debug("Text review found %d changed block(s)", revisions)
        if revisions == 0:
            return ReviewOutcome(0)

        artifact = diff_artifact_path(actual_path)
        self._render(expected_lines, actual_lines, opcodes, Path(expected_path), Path(actual_path), artifact)
        return ReviewOutcome(revisions, artifact)

    def _render(
        self,
        expected_lines: list[str],
        actual_lines: list[str],
        opcodes: list[tuple[str, int, int, int, int]],
        expected_path: Path,
        actual_path: Path,
        artifact: Path,
    ) -> None:
        from docx import Document
        from docx.shared import RGBColor

        doc = Document()
        doc.add_heading("Document comparison", level=1)
        doc.add_paragraph(f"Expected: {expected_path.name}")
        doc.add_paragraph(f"Actual: {actual_path.name}")

        def add_line(text: str, deleted: bool = False, inserted: bool = False) -> None:
            run = doc.add_paragraph().add_run(text)
            if deleted:
                run.font.strike = True
                run.font.color.rgb = RGBColor(*DELETED_COLOR)
            elif inserted:
                run.font.underline = True
                run.font.color.rgb = RGBColor(*INSERTED_COLOR)

        for tag, i1, i2, j1, j2 in opcodes:
            if tag == "equal":
                for line in expected_lines[i1:i2]:
                    add_line(line)
                continue
            for line in expected_lines[i1:i2]:
                add_line(line, deleted=True)
            for line in actual_lines[j1:j2]:
                add_line(line, inserted=True)

        try:
            doc.save(str(artifact))
        except OSError as e:
            raise ExternalToolError(
                f"Cannot write diff document {artifact}: {e}", tool_name=self.name, original_error=e
            ) from e


__all__ = ["TextReviewer", "extract_lines"]

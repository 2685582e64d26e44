"""Test utilities for the docxcompare test suite.

Helpers for building zip containers and DOCX documents on disk, plus
instrumented streams for checking how much of an input was read.
"""

from __future__ import annotations

import io
import struct
from pathlib import Path
from typing import Iterable, Mapping
from zipfile import ZIP_DEFLATED, ZIP_STORED, ZipFile, ZipInfo

import docx


def write_zip(
    path: Path,
    entries: Mapping[str, bytes | str] | Iterable[tuple[str, bytes | str]],
    compression: int = ZIP_DEFLATED,
    date_time: tuple[int, int, int, int, int, int] = (2024, 1, 1, 0, 0, 0),
) -> Path:
    """Write a zip archive with the given entries, in the given order."""
    items = entries.items() if isinstance(entries, Mapping) else entries
    with ZipFile(path, mode="w", compression=compression) as archive:
        for name, content in items:
            info = ZipInfo(name, date_time=date_time)
            info.compress_type = compression
            archive.writestr(info, content)
    return path


def write_stored_zip(path: Path, entries: Mapping[str, bytes | str]) -> Path:
    """Write an uncompressed zip archive."""
    return write_zip(path, entries, compression=ZIP_STORED)


def patch_central_directory(
    path: Path, name: str, flag_bits: int | None = None, crc: int | None = None
) -> Path:
    """Overwrite the general purpose flags or CRC-32 of one central directory record.

    zipfile trusts the central directory for both, so this is enough to make
    an entry look encrypted or fail its CRC check on read.
    """
    data = bytearray(path.read_bytes())
    encoded = name.encode("utf-8")
    offset = data.find(b"PK\x01\x02")
    while offset != -1:
        (name_length,) = struct.unpack_from("<H", data, offset + 28)
        if data[offset + 46 : offset + 46 + name_length] == encoded:
            if flag_bits is not None:
                struct.pack_into("<H", data, offset + 8, flag_bits)
            if crc is not None:
                struct.pack_into("<I", data, offset + 16, crc)
            path.write_bytes(bytes(data))
            return path
        offset = data.find(b"PK\x01\x02", offset + 4)
    raise KeyError(name)


def create_docx(
    path: Path,
    paragraphs: Iterable[str],
    title: str | None = None,
    header_text: str | None = None,
    table_rows: Iterable[Iterable[str]] | None = None,
) -> Path:
    """Create a DOCX document with python-docx."""
    document = docx.Document()
    for text in paragraphs:
        document.add_paragraph(text)
    if table_rows is not None:
        rows = [list(row) for row in table_rows]
        table = document.add_table(rows=len(rows), cols=len(rows[0]))
        for row_cells, values in zip(table.rows, rows):
            for cell, value in zip(row_cells.cells, values):
                cell.text = value
    if header_text is not None:
        document.sections[0].header.paragraphs[0].text = header_text
    if title is not None:
        document.core_properties.title = title
    document.save(str(path))
    return path


class ChunkedStream(io.RawIOBase):
    """Readable stream that returns at most ``max_read`` bytes per call.

    Records how many times ``read`` was called and how many bytes were
    handed out, so tests can check early exits and short-read handling.
    """

    def __init__(self, data: bytes, max_read: int | None = None):
        self._buffer = io.BytesIO(data)
        self.max_read = max_read
        self.read_calls = 0
        self.bytes_read = 0

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        self.read_calls += 1
        if self.max_read is not None and (size < 0 or size > self.max_read):
            size = self.max_read
        data = self._buffer.read(size)
        self.bytes_read += len(data)
        return data

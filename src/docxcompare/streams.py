#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docxcompare/streams.py
"""Byte-level equality checks for streams and whole files.

Both checks read incrementally in fixed-size chunks so neither input is
ever loaded fully into memory. :func:`streams_equal` is shared by the
whole-file fast path and by the per-entry comparison inside archives, so
it only relies on ``read(n)`` and never on seeking or on a known length.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO

from docxcompare.constants import DEFAULT_CHUNK_SIZE
from docxcompare.exceptions import FileAccessError, NotFoundError

logger = logging.getLogger(__name__)


def _read_chunk(stream: IO[bytes], size: int) -> bytes:
    """Read up to ``size`` bytes, looping over short reads.

    Buffered file objects already behave this way, but raw streams and some
    decompressing readers may return fewer bytes than requested before EOF.
    Filling the chunk keeps the two sides aligned regardless of how each
    stream buffers internally.
    """
    data = stream.read(size)
    if not data or len(data) == size:
        return data
    parts = [data]
    remaining = size - len(data)
    while remaining > 0:
        more = stream.read(remaining)
        if not more:
            break
        parts.append(more)
        remaining -= len(more)
    return b"".join(parts)


def streams_equal(a: IO[bytes], b: IO[bytes], chunk_size: int = DEFAULT_CHUNK_SIZE) -> bool:
    """Compare two binary streams for exact equality.

    The streams are read in lock-step from their current positions. The
    comparison stops at the first chunk whose length or content differs.
    Neither stream is closed; both are left positioned wherever the
    comparison stopped.

    Parameters
    ----------
    a, b : IO[bytes]
        Readable binary streams
    chunk_size : int, default 4096
        Number of bytes read from each stream per step. Any positive size
        gives the same result.

    Returns
    -------
    bool
        True if both streams produce the same byte sequence

    Raises
    ------
    ValueError
        If ``chunk_size`` is not positive

    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    while True:
        chunk_a = _read_chunk(a, chunk_size)
        chunk_b = _read_chunk(b, chunk_size)

        if len(chunk_a) != len(chunk_b):
            return False

        if not chunk_a:
            return True

        if chunk_a != chunk_b:
            return False


def _file_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except FileNotFoundError as e:
        raise NotFoundError(str(path), original_error=e) from e
    except OSError as e:
        raise FileAccessError(str(path), original_error=e) from e


def _open_binary(path: Path) -> IO[bytes]:
    try:
        return open(path, "rb")
    except FileNotFoundError as e:
        raise NotFoundError(str(path), original_error=e) from e
    except OSError as e:
        raise FileAccessError(str(path), original_error=e) from e


def files_equal(
    path_a: str | os.PathLike[str],
    path_b: str | os.PathLike[str],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bool:
    """Compare two files byte for byte.

    File sizes are compared first; files of different length are reported
    unequal without opening either of them.

    Parameters
    ----------
    path_a, path_b : str or PathLike
        Files to compare
    chunk_size : int, default 4096
        Read size passed to :func:`streams_equal`

    Returns
    -------
    bool
        True if both files hold exactly the same bytes

    Raises
    ------
    NotFoundError
        If either path does not exist
    FileAccessError
        If either file cannot be read

    """
    path_a = Path(path_a)
    path_b = Path(path_b)

    size_a = _file_size(path_a)
    size_b = _file_size(path_b)
    if size_a != size_b:
        logger.debug("Size mismatch: %s (%d bytes) vs %s (%d bytes)", path_a, size_a, path_b, size_b)
        return False

    with _open_binary(path_a) as stream_a, _open_binary(path_b) as stream_b:
        try:
            return streams_equal(stream_a, stream_b, chunk_size)
        except OSError as e:
            raise FileAccessError(
                f"{path_a} or {path_b}", message=f"Read failed comparing {path_a} and {path_b}: {e}", original_error=e
            ) from e


__all__ = ["files_equal", "streams_equal"]

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2term/utils/inputs.py
"""Reading Markdown source from files and standard input.

Input is always decoded as UTF-8. A leading byte order mark is dropped and
undecodable bytes are reported instead of silently replaced, so the caller
can tell a broken file apart from an empty one.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import BinaryIO, Optional, Union

from md2term.exceptions import FileAccessError, MalformedFileError
from md2term.exceptions import FileNotFoundError as Md2TermFileNotFoundError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

STDIN_MARKER = "-"


def is_stdin_path(path: Optional[PathLike]) -> bool:
    """Return True if ``path`` means standard input (missing or ``-``)."""
    return path is None or str(path) == STDIN_MARKER


def decode_markdown(data: bytes, source: str = "<stdin>") -> str:
    """Decode raw Markdown bytes as UTF-8.

    Parameters
    ----------
    data : bytes
        Raw input
    source : str, default "<stdin>"
        Name used in error messages

    Returns
    -------
    str
        Decoded text without a byte order mark

    Raises
    ------
    MalformedFileError
        If the bytes are not valid UTF-8

    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise MalformedFileError(
            f"Input is not valid UTF-8 (byte {e.start}): {source}",
            file_path=source,
            original_error=e,
        ) from e


def read_markdown_input(path: Optional[PathLike] = None, stdin: Optional[BinaryIO] = None) -> str:
    """Read Markdown text from a file path or from standard input.

    Parameters
    ----------
    path : str, Path or None, default None
        File to read. None or ``"-"`` reads standard input.
    stdin : binary file-like, optional
        Stream used instead of ``sys.stdin.buffer``

    Returns
    -------
    str
        Markdown source text

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    FileAccessError
        If the path is a directory or cannot be read
    MalformedFileError
        If the content is not valid UTF-8

    Examples
    --------
        >>> from io import BytesIO
        >>> read_markdown_input("-", stdin=BytesIO(b"# Title"))
        '# Title'

    """
    if is_stdin_path(path):
        stream = stdin if stdin is not None else sys.stdin.buffer
        logger.debug("Reading Markdown from standard input")
        try:
            data = stream.read()
        except OSError as e:
            raise FileAccessError("<stdin>", f"Cannot read standard input: {e}", original_error=e) from e
        return decode_markdown(data)

    file_path = Path(path)  # type: ignore[arg-type]
    if not file_path.exists():
        raise Md2TermFileNotFoundError(str(file_path))
    if file_path.is_dir():
        raise FileAccessError(str(file_path), f"Is a directory: {file_path}")
    if not os.access(file_path, os.R_OK):
        raise FileAccessError(str(file_path))

    logger.debug("Reading Markdown from %s", file_path)
    try:
        data = file_path.read_bytes()
    except OSError as e:
        raise FileAccessError(str(file_path), f"Cannot read file {file_path}: {e}", original_error=e) from e
    return decode_markdown(data, source=str(file_path))

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/abbr2markup/utils/io_utils.py
"""Output helpers for writing rendered text."""

from __future__ import annotations

import io
from pathlib import Path
from typing import IO, Union, cast


def write_text(content: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
    """Write rendered text to a path or a file-like object.

    Parameters
    ----------
    content : str
        Text to write
    output : str, Path, IO[bytes] or IO[str]
        File path (written as UTF-8) or an open stream in text or binary mode

    Raises
    ------
    TypeError
        If output type is not supported

    """
    if isinstance(output, (str, Path)):
        Path(output).write_text(content, encoding="utf-8")
        return

    if not hasattr(output, "write"):
        raise TypeError(f"Unsupported output type: {type(output)}")

    if isinstance(output, io.TextIOBase):
        is_binary_mode = False
    elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        is_binary_mode = True
    else:
        mode = getattr(output, "mode", "")
        is_binary_mode = isinstance(mode, str) and "b" in mode

    if is_binary_mode:
        cast(IO[bytes], output).write(content.encode("utf-8"))
    else:
        cast(IO[str], output).write(content)

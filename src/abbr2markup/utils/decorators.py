#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/abbr2markup/utils/decorators.py
"""Timing helpers for pipeline stages."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Generator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Context manager timing an operation with DEBUG-level logging.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance to use for DEBUG messages
    operation : str
        Description of the operation being timed (e.g., "Parsing")

    Examples
    --------
        >>> with debug_timer(logger, "Parsing"):
        ...     nodes = parse_abbreviation("ul>li*3")
        ... # Logs: "Parsing completed in 0.0001s" at DEBUG level

    Notes
    -----
    Only measures time when the logger has DEBUG level enabled.

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.4f}s")
    else:
        yield

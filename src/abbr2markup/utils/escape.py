#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/abbr2markup/utils/escape.py
"""Markup escaping utilities for rendered output."""

from __future__ import annotations

import html


def escape_attribute(value: str) -> str:
    """Escape a value for use inside a double-quoted attribute.

    Only ``&`` and ``"`` are escaped, so values stay readable while never
    terminating the attribute early.

    Parameters
    ----------
    value : str
        Raw attribute value

    Returns
    -------
    str
        Escaped value

    Examples
    --------
        >>> escape_attribute('say "hi" & go')
        'say &quot;hi&quot; &amp; go'

    """
    return value.replace("&", "&amp;").replace('"', "&quot;")


def escape_text(text: str, *, enabled: bool = True) -> str:
    """Escape ``&``, ``<`` and ``>`` in element text when enabled."""
    if not enabled:
        return text
    return html.escape(text, quote=False)

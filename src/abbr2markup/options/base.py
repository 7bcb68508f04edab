"""Base classes for expansion and renderer options.

This module defines the foundation classes for the option dataclasses
used throughout the abbr2markup pipeline.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Return the names of all dataclass fields on this options class."""
        return frozenset(f.name for f in fields(cls))  # type: ignore[arg-type]


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Renderers convert an expanded node tree into an output format (markup
    text, JSON).

    Notes
    -----
    Subclasses should define format-specific rendering options as frozen dataclass fields.

    """

    def __post_init__(self) -> None:
        """Validate numeric ranges for renderer options."""
        pass

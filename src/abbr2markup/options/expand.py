#  Copyright (c) 2025 Tom Villani, Ph.D.
# abbr2markup/options/expand.py
"""Configuration options for abbreviation expansion.

This module defines the options that control the tree-producing half of the
pipeline: the fallback tag, the implicit-tag lookup table, and the budget
on the number of expanded nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from abbr2markup.constants import DEFAULT_MAX_EXPANDED_NODES, DEFAULT_PARENT_TAG_TABLE, DEFAULT_TAG
from abbr2markup.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class ExpandOptions(CloneFrozenMixin):
    """Configuration options for expanding an abbreviation into a node tree.

    Parameters
    ----------
    default_tag : str, default "div"
        Tag used for an element without an explicit tag name when the
        parent context provides no default child tag.
    parent_tag_table : Mapping[str, str], default DEFAULT_PARENT_TAG_TABLE
        Lookup from a parent tag name to the tag used for its implicit
        children (for example ``ul`` -> ``li``). Replaces the built-in
        table entirely; use ``merge_parent_tag_table`` to extend it.
    max_expanded_nodes : int, default 10000
        Upper bound on the number of elements an expansion may produce.
        Abbreviations over the bound raise ``LimitExceededError``.

    Examples
    --------
        >>> options = ExpandOptions(default_tag="section")
        >>> options.create_updated(max_expanded_nodes=50).max_expanded_nodes
        50

    """

    default_tag: str = field(
        default=DEFAULT_TAG,
        metadata={"help": "Fallback tag for elements without a tag name or context default", "importance": "core"},
    )
    parent_tag_table: Mapping[str, str] = field(
        default_factory=lambda: DEFAULT_PARENT_TAG_TABLE,
        metadata={
            "help": "Parent tag to implicit child tag lookup (replaces the built-in table)",
            "importance": "advanced",
        },
    )
    max_expanded_nodes: int = field(
        default=DEFAULT_MAX_EXPANDED_NODES,
        metadata={
            "help": "Maximum number of elements a single expansion may produce",
            "type": int,
            "importance": "security",
        },
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if not self.default_tag or not isinstance(self.default_tag, str):
            raise ValueError(f"default_tag must be a non-empty string, got {self.default_tag!r}")
        if self.max_expanded_nodes <= 0:
            raise ValueError(f"max_expanded_nodes must be positive, got {self.max_expanded_nodes}")
        for parent, child in self.parent_tag_table.items():
            if not parent or not child:
                raise ValueError(f"parent_tag_table entries must be non-empty, got {parent!r} -> {child!r}")
        # Freeze a caller-supplied dict so the options stay immutable
        if not isinstance(self.parent_tag_table, MappingProxyType):
            object.__setattr__(self, "parent_tag_table", MappingProxyType(dict(self.parent_tag_table)))


def merge_parent_tag_table(
    overrides: Mapping[str, str], base: Mapping[str, str] = DEFAULT_PARENT_TAG_TABLE
) -> Mapping[str, str]:
    """Return a lookup table with ``overrides`` layered over ``base``.

    Parameters
    ----------
    overrides : Mapping[str, str]
        Entries to add or replace
    base : Mapping[str, str], default DEFAULT_PARENT_TAG_TABLE
        Table to start from

    Returns
    -------
    Mapping[str, str]
        Read-only merged table

    """
    merged = dict(base)
    merged.update(overrides)
    return MappingProxyType(merged)

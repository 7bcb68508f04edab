#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/abbr2markup/transforms/context.py
"""Implicit tag resolution from parent context.

An element written without a tag name (``.item``, ``*3``, ``{text}``) takes
its tag from the nearest ancestor element: the ancestor's tag is looked up
in a parent-to-child table (``ul`` -> ``li``, ``tr`` -> ``td``). At the root,
or under a parent with no table entry, the default tag is used.

Resolution is purely structural. Classes, attributes and text never
influence it, and groups are transparent: a group's members see the
group's own parent.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from abbr2markup.ast.nodes import AbbreviationNode
from abbr2markup.constants import DEFAULT_PARENT_TAG_TABLE, DEFAULT_TAG

logger = logging.getLogger(__name__)


def resolve_implicit_tag(
    parent_tag: Optional[str],
    parent_tag_table: Mapping[str, str] = DEFAULT_PARENT_TAG_TABLE,
    default_tag: str = DEFAULT_TAG,
) -> str:
    """Return the tag for an element without an explicit tag name.

    Parameters
    ----------
    parent_tag : str or None
        Tag of the nearest ancestor element, None at the root
    parent_tag_table : Mapping[str, str]
        Parent tag to implicit child tag lookup
    default_tag : str
        Tag used when the table has no entry or there is no parent

    Returns
    -------
    str
        Resolved tag name

    Examples
    --------
        >>> resolve_implicit_tag("ul")
        'li'
        >>> resolve_implicit_tag("section")
        'div'
        >>> resolve_implicit_tag(None, default_tag="span")
        'span'

    """
    if parent_tag is None:
        return default_tag
    # Tag names are case-insensitive in HTML
    return parent_tag_table.get(parent_tag, parent_tag_table.get(parent_tag.lower(), default_tag))


def resolve_implicit_tags(
    nodes: list[AbbreviationNode],
    parent_tag_table: Mapping[str, str] = DEFAULT_PARENT_TAG_TABLE,
    default_tag: str = DEFAULT_TAG,
    parent_tag: Optional[str] = None,
) -> list[AbbreviationNode]:
    """Fill in every missing tag name of an expanded abbreviation tree.

    Parameters
    ----------
    nodes : list of AbbreviationNode
        Sibling nodes, already expanded by ``expand_repeats``; left unmodified
    parent_tag_table : Mapping[str, str]
        Parent tag to implicit child tag lookup
    default_tag : str
        Fallback tag
    parent_tag : str or None, default None
        Tag of the element the siblings are nested in

    Returns
    -------
    list of AbbreviationNode
        New tree where every non-group node has a tag name

    """
    resolved: list[AbbreviationNode] = []
    for node in nodes:
        if node.is_group:
            children = resolve_implicit_tags(node.children, parent_tag_table, default_tag, parent_tag)
            resolved.append(node.copy_with(children=children))
            continue

        tag_name = node.tag_name
        if not tag_name:
            tag_name = resolve_implicit_tag(parent_tag, parent_tag_table, default_tag)
            logger.debug("Resolved implicit tag under %r to %r", parent_tag, tag_name)
        children = resolve_implicit_tags(node.children, parent_tag_table, default_tag, tag_name)
        resolved.append(node.copy_with(tag_name=tag_name, children=children))
    return resolved

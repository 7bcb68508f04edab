#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/abbr2markup/transforms/numbering.py
"""Multiplier unrolling and numbering substitution.

``expand_repeats`` walks a parsed abbreviation tree and returns a new tree
in which every node has ``multiplier == 1``: a node with ``multiplier = N``
is replaced by N deep copies of itself and its subtree. Every ``$`` run in
a replica's tag name, classes, id, attribute values and text is replaced
by the replica's number, zero-padded to the run's length.

Numbering scope
---------------
- A multiplied element numbers its own strings with its replica number.
- A group passes its replica to its direct members; a member that is not
  multiplied itself uses the group's replica number, or its own numbering
  settings applied to the group's replica index when it has any.
- Any other unmultiplied element uses index 1.

Nested multipliers produce the full cross product, and inner numbering
restarts inside every outer replica.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from abbr2markup.ast.nodes import AbbreviationNode
from abbr2markup.exceptions import LimitExceededError

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\$+")


@dataclass(frozen=True)
class _Replica:
    """Repetition context handed from a group replica to its members."""

    index: int
    count: int
    number: int


def substitute_numbering(template: Optional[str], number: int) -> Optional[str]:
    """Replace every ``$`` run in ``template`` with ``number``.

    Parameters
    ----------
    template : str or None
        Text possibly containing ``$`` runs
    number : int
        Value to insert

    Returns
    -------
    str or None
        Template with each run replaced by ``number`` zero-padded to the
        run's length; None when ``template`` is None

    Examples
    --------
        >>> substitute_numbering("section$$$", 7)
        'section007'
        >>> substitute_numbering("item$", 12)
        'item12'

    """
    if template is None or "$" not in template:
        return template
    return _PLACEHOLDER.sub(lambda match: str(number).zfill(len(match.group(0))), template)


def count_expanded_nodes(nodes: list[AbbreviationNode], limit: Optional[int] = None) -> int:
    """Count the elements an abbreviation tree expands into.

    The count is computed arithmetically, without building any replica, so
    it is safe to call on trees that would be enormous once expanded.

    Parameters
    ----------
    nodes : list of AbbreviationNode
        Parsed top-level nodes
    limit : int or None, default None
        When given, raise as soon as the running count exceeds it

    Returns
    -------
    int
        Number of ExpandedNode elements the tree produces

    Raises
    ------
    LimitExceededError
        If ``limit`` is given and exceeded; the position is that of the
        node whose repetition crossed the limit

    """

    def check(total: int, node: AbbreviationNode) -> None:
        if limit is not None and total > limit:
            raise LimitExceededError(
                f"Expansion would produce {total} elements, more than the limit of {limit}",
                node.position,
                limit,
            )

    def count_list(siblings: list[AbbreviationNode]) -> int:
        total = 0
        for sibling in siblings:
            total += count_node(sibling)
            check(total, sibling)
        return total

    def count_node(node: AbbreviationNode) -> int:
        per_replica = count_list(node.children) + (0 if node.is_group else 1)
        total = per_replica * node.multiplier
        check(total, node)
        return total

    return count_list(nodes)


def expand_repeats(nodes: list[AbbreviationNode], max_expanded_nodes: Optional[int] = None) -> list[AbbreviationNode]:
    """Unroll multipliers and substitute numbering placeholders.

    Parameters
    ----------
    nodes : list of AbbreviationNode
        Parsed top-level nodes; left unmodified
    max_expanded_nodes : int or None, default None
        Budget checked before any replica is built

    Returns
    -------
    list of AbbreviationNode
        New tree where every node has multiplier 1 and no ``$`` runs

    Raises
    ------
    LimitExceededError
        If the expansion would exceed ``max_expanded_nodes``

    """
    if max_expanded_nodes is not None:
        total = count_expanded_nodes(nodes, max_expanded_nodes)
        logger.debug("Expansion will produce %d element(s)", total)
    return _expand_list(nodes, None)


def _expand_list(nodes: list[AbbreviationNode], inherited: Optional[_Replica]) -> list[AbbreviationNode]:
    expanded: list[AbbreviationNode] = []
    for node in nodes:
        expanded.extend(_expand_node(node, inherited))
    return expanded


def _has_own_numbering(node: AbbreviationNode) -> bool:
    return node.numbering_start != 1 or node.numbering_step != 1 or node.numbering_reversed


def _replica_for(node: AbbreviationNode, index: int, inherited: Optional[_Replica]) -> _Replica:
    count = node.multiplier
    if count > 1 or inherited is None:
        return _Replica(index, count, node.number_for(index, count))
    if _has_own_numbering(node):
        return _Replica(inherited.index, inherited.count, node.number_for(inherited.index, inherited.count))
    return inherited


def _expand_node(node: AbbreviationNode, inherited: Optional[_Replica]) -> list[AbbreviationNode]:
    replicas: list[AbbreviationNode] = []
    for index in range(1, node.multiplier + 1):
        replica = _replica_for(node, index, inherited)
        number = replica.number
        # Only groups are transparent to numbering
        children = _expand_list(node.children, replica if node.is_group else None)
        replicas.append(
            AbbreviationNode(
                tag_name=substitute_numbering(node.tag_name, number),
                classes=[substitute_numbering(name, number) or "" for name in node.classes],
                id=substitute_numbering(node.id, number),
                attributes={name: substitute_numbering(value, number) for name, value in node.attributes.items()},
                text=substitute_numbering(node.text, number),
                multiplier=1,
                numbering_start=node.numbering_start,
                numbering_step=node.numbering_step,
                numbering_reversed=node.numbering_reversed,
                children=children,
                is_group=node.is_group,
                source_location=node.source_location,
            )
        )
    return replicas

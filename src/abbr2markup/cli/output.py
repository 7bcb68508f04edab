#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Rich-based terminal output for the abbr2markup CLI.

User input is always wrapped in ``rich.text.Text`` so that brackets in an
abbreviation are never read as console markup.
"""

from __future__ import annotations

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from abbr2markup.ast.nodes import ExpandedNode
from abbr2markup.exceptions import AbbreviationError, format_error_context


def report_abbreviation_error(console: Console, abbreviation: str, error: AbbreviationError) -> None:
    """Print an abbreviation error with a caret under the offending offset.

    Parameters
    ----------
    console : Console
        Console to print to (normally bound to stderr)
    abbreviation : str
        The abbreviation that failed
    error : AbbreviationError
        The error raised for it

    """
    header = Text()
    header.append(error.kind, style="bold red")
    header.append(f" at position {error.position}: ", style="red")
    header.append(error.message)
    console.print(header)

    source_line, caret_line = format_error_context(abbreviation, error).split("\n")
    console.print(Text("  " + source_line))
    console.print(Text("  " + caret_line, style="bold yellow"))


def report_error(console: Console, message: str) -> None:
    """Print a general error message."""
    line = Text("Error: ", style="bold red")
    line.append(message)
    console.print(line)


def _element_label(node: ExpandedNode) -> Text:
    label = Text(node.tag, style="bold cyan")
    if node.id is not None:
        label.append(f"#{node.id}", style="magenta")
    for name in node.classes:
        label.append(f".{name}", style="green")
    for name, value in node.attributes.items():
        label.append(f" {name}" if value is None else f' {name}="{value}"', style="yellow")
    if node.text:
        label.append(f" {node.text!r}", style="dim")
    return label


def build_rich_tree(nodes: list[ExpandedNode], title: str) -> Tree:
    """Build a rich Tree showing the expanded elements.

    Parameters
    ----------
    nodes : list of ExpandedNode
        Top-level elements
    title : str
        Root label, normally the abbreviation

    Returns
    -------
    Tree
        Renderable tree

    """
    tree = Tree(Text(title, style="bold"))

    def add(branch: Tree, children: list[ExpandedNode]) -> None:
        for child in children:
            add(branch.add(_element_label(child)), child.children)

    add(tree, nodes)
    return tree

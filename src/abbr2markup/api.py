"""The major exported API functions for abbreviation expansion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/abbr2markup/api.py
import logging
from typing import Any, Optional, Union

from abbr2markup.ast.builder import build_tree
from abbr2markup.ast.nodes import AbbreviationNode, ExpandedNode
from abbr2markup.constants import OutputFormat
from abbr2markup.exceptions import InvalidOptionsError
from abbr2markup.options.expand import ExpandOptions
from abbr2markup.options.markup import JsonRendererOptions, MarkupRendererOptions
from abbr2markup.parsers.abbreviation import AbbreviationParser
from abbr2markup.renderers.base import BaseRenderer
from abbr2markup.renderers.json import JsonRenderer
from abbr2markup.renderers.markup import MarkupRenderer
from abbr2markup.transforms.context import resolve_implicit_tags
from abbr2markup.transforms.numbering import expand_repeats
from abbr2markup.utils.decorators import debug_timer

logger = logging.getLogger(__name__)

# camelCase names accepted as aliases for option fields
_OPTION_ALIASES = {
    "defaultTag": "default_tag",
    "parentTagTable": "parent_tag_table",
    "indentUnit": "indent_unit",
    "maxExpandedNodes": "max_expanded_nodes",
}

RendererOptions = Union[MarkupRendererOptions, JsonRendererOptions]


def _split_option_kwargs(
    kwargs: dict[str, Any], renderer_options_class: type[RendererOptions]
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split keyword overrides between expansion and renderer options.

    Parameters
    ----------
    kwargs : dict
        Keyword overrides, snake_case or camelCase alias names
    renderer_options_class : type
        Options class of the selected renderer

    Returns
    -------
    tuple[dict, dict]
        (expand_kwargs, renderer_kwargs)

    Raises
    ------
    InvalidOptionsError
        If a key matches neither options class

    """
    expand_fields = ExpandOptions.field_names()
    renderer_fields = renderer_options_class.field_names()

    expand_kwargs: dict[str, Any] = {}
    renderer_kwargs: dict[str, Any] = {}
    for key, value in kwargs.items():
        name = _OPTION_ALIASES.get(key, key)
        if name in expand_fields:
            expand_kwargs[name] = value
        elif name in renderer_fields:
            renderer_kwargs[name] = value
        elif name == "indent_unit":
            # Only meaningful for markup output
            logger.debug("Ignoring indent_unit for %s", renderer_options_class.__name__)
        else:
            raise InvalidOptionsError(
                component_name="expand",
                expected_type=ExpandOptions,
                received_type=type(value),
                message=f"Unknown option '{key}'",
            )
    return expand_kwargs, renderer_kwargs


def _resolve_expand_options(options: Optional[ExpandOptions], overrides: dict[str, Any]) -> ExpandOptions:
    if options is not None and not isinstance(options, ExpandOptions):
        raise InvalidOptionsError(component_name="expand", expected_type=ExpandOptions, received_type=type(options))
    options = options or ExpandOptions()
    if overrides:
        options = options.create_updated(**overrides)
    return options


def parse(abbreviation: str) -> list[AbbreviationNode]:
    """Parse an abbreviation without expanding it.

    Parameters
    ----------
    abbreviation : str
        Abbreviation to parse; surrounding whitespace is ignored,
        and error offsets index into the string as given

    Returns
    -------
    list of AbbreviationNode
        Top-level siblings of the parsed abbreviation

    Raises
    ------
    AbbreviationLexError, AbbreviationSyntaxError, InvalidMultiplierError
        If the abbreviation is malformed

    """
    return AbbreviationParser().parse(abbreviation)


def expand_to_tree(abbreviation: str, options: Optional[ExpandOptions] = None, **kwargs: Any) -> list[ExpandedNode]:
    """Expand an abbreviation into its element tree.

    Runs tokenize, parse, repeat expansion, implicit-tag resolution and
    tree building. Every call works on fresh structures; nothing is cached
    between calls.

    Parameters
    ----------
    abbreviation : str
        Abbreviation to expand; surrounding whitespace is ignored,
        and error offsets index into the string as given
    options : ExpandOptions, optional
        Expansion options
    **kwargs
        Overrides for individual ExpandOptions fields

    Returns
    -------
    list of ExpandedNode
        Top-level elements

    Raises
    ------
    AbbreviationError
        The first problem found in the abbreviation
    InvalidOptionsError
        If options are of the wrong type or an override is unknown

    Examples
    --------
        >>> [node.tag for node in expand_to_tree("ul>*2")[0].children]
        ['li', 'li']

    """
    expand_kwargs, unknown = _split_option_kwargs(kwargs, MarkupRendererOptions)
    if unknown:
        raise InvalidOptionsError(
            component_name="expand_to_tree",
            expected_type=ExpandOptions,
            received_type=dict,
            message=f"Renderer options are not accepted here: {sorted(unknown)}",
        )
    expand_options = _resolve_expand_options(options, expand_kwargs)
    return _run_pipeline(abbreviation, expand_options)


def _run_pipeline(abbreviation: str, options: ExpandOptions) -> list[ExpandedNode]:
    with debug_timer(logger, f"Parsing ({abbreviation!r})"):
        parsed = AbbreviationParser().parse(abbreviation)
    with debug_timer(logger, "Repeat expansion"):
        repeated = expand_repeats(parsed, options.max_expanded_nodes)
    resolved = resolve_implicit_tags(repeated, options.parent_tag_table, options.default_tag)
    return build_tree(resolved)


def _make_renderer(output_format: OutputFormat, renderer_options: Optional[RendererOptions]) -> BaseRenderer:
    if output_format == "markup":
        return MarkupRenderer(renderer_options)  # type: ignore[arg-type]
    if output_format == "json":
        return JsonRenderer(renderer_options)  # type: ignore[arg-type]
    raise ValueError(f"Unsupported output format: {output_format!r}")


def expand(
    abbreviation: str,
    options: Optional[ExpandOptions] = None,
    renderer_options: Optional[RendererOptions] = None,
    output_format: OutputFormat = "markup",
    **kwargs: Any,
) -> str:
    """Expand an abbreviation and serialize the result.

    Parameters
    ----------
    abbreviation : str
        Abbreviation to expand, e.g. ``"ul>li.item$*3"``
    options : ExpandOptions, optional
        Expansion options (default tag, implicit-tag table, node budget)
    renderer_options : MarkupRendererOptions or JsonRendererOptions, optional
        Options for the selected output format
    output_format : {"markup", "json"}, default "markup"
        Serializer to use
    **kwargs
        Overrides for individual option fields, routed to whichever options
        class owns them. ``defaultTag``, ``parentTagTable``, ``indentUnit``
        and ``maxExpandedNodes`` are accepted as aliases.

    Returns
    -------
    str
        Serialized output

    Raises
    ------
    AbbreviationError
        The first problem found in the abbreviation; no partial output
    InvalidOptionsError
        If options are of the wrong type or an override is unknown

    Examples
    --------
        >>> print(expand("ul>li.item$*2"))
        <ul>
          <li class="item1"></li>
          <li class="item2"></li>
        </ul>

    """
    options_class: type[RendererOptions] = MarkupRendererOptions if output_format == "markup" else JsonRendererOptions
    expand_kwargs, renderer_kwargs = _split_option_kwargs(kwargs, options_class)
    expand_options = _resolve_expand_options(options, expand_kwargs)

    if renderer_kwargs:
        renderer_options = (renderer_options or options_class()).create_updated(**renderer_kwargs)
    renderer = _make_renderer(output_format, renderer_options)

    nodes = _run_pipeline(abbreviation, expand_options)
    with debug_timer(logger, f"Rendering ({output_format})"):
        return renderer.render_to_string(nodes)


__all__ = ["expand", "expand_to_tree", "parse"]

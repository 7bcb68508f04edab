#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers that serialize expanded trees."""

from abbr2markup.renderers.base import BaseRenderer
from abbr2markup.renderers.json import JsonRenderer
from abbr2markup.renderers.markup import MarkupRenderer

__all__ = ["BaseRenderer", "JsonRenderer", "MarkupRenderer"]

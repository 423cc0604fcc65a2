"""Rendering of resolved icons: dimension scaling, transform composition, SVG markup."""

from iconset.rendering.dimensions import calculate_dimension, format_number
from iconset.rendering.geometry import Box, compose_transforms
from iconset.rendering.ids import replace_ids
from iconset.rendering.svg import (
    IconRenderData,
    IconSVG,
    parse_alignment,
    parse_rotation,
    split_attributes,
)

__all__ = [
    "Box",
    "IconRenderData",
    "IconSVG",
    "calculate_dimension",
    "compose_transforms",
    "format_number",
    "parse_alignment",
    "parse_rotation",
    "replace_ids",
    "split_attributes",
]

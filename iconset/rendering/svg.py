"""
SVG rendering of resolved icons.

Contains:
- split_attributes: separate icon options from pass-through <svg> attributes
- parse_rotation: rotate option ("1", 2, "90deg", "75%") to quarter turns
- parse_alignment: align option ("left,bottom,crop") to preserveAspectRatio
- IconSVG: attributes, style and body for one icon, and full markup

Icon options (same names as the query string of an icon API):
    width, height   "auto" = box size, False = omit, None = derive
    inline          use inlineTop/inlineHeight and add vertical-align
    hFlip, vFlip    toggle a flip
    flip            "horizontal", "vertical" or both, comma/space separated
    rotate          quarter turns, or a value in "deg" / "%"
    align           left|center|right, top|middle|bottom, meet|crop (slice)
    color           replaces currentColor in the body
    box             append a transparent rect covering the viewBox
    style           extra CSS appended to the style attribute
"""

import html
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from svgwrite.shapes import Rect

from iconset.project_config import RenderConfig
from iconset.rendering.dimensions import calculate_dimension, format_number
from iconset.rendering.geometry import Box, compose_transforms
from iconset.rendering.ids import replace_ids

logger = logging.getLogger(__name__)

ICON_OPTIONS = frozenset({
    'width', 'height', 'inline', 'hFlip', 'vFlip', 'flip',
    'rotate', 'align', 'color', 'box', 'style',
})

# Keeps browsers from rendering icons on sub-pixel offsets
_ROTATE_FIX = "-ms-transform: rotate(360deg); -webkit-transform: rotate(360deg); transform: rotate(360deg);"

_ROTATE_UNIT_STEPS = {'%': 25, 'deg': 90}
_LEADING_NUMBER = re.compile(r'^-?[0-9.]*')
_LEADING_INT = re.compile(r'^\s*-?\d+')
_TOKEN_SEPARATORS = re.compile(r'[\s,]+')

_HORIZONTAL = {'left': 'xMin', 'center': 'xMid', 'right': 'xMax'}
_VERTICAL = {'top': 'YMin', 'middle': 'YMid', 'bottom': 'YMax'}


@dataclass
class SplitAttributes:
    """Options consumed by the icon and attributes passed to the <svg> node."""
    icon: Dict[str, Any] = field(default_factory=dict)
    node: Dict[str, Any] = field(default_factory=dict)


@dataclass
class IconRenderData:
    """Everything needed to emit an <svg> element for one icon."""
    attributes: Dict[str, Any]
    style: Dict[str, str]
    body: str


def split_attributes(props: Dict[str, Any]) -> SplitAttributes:
    """Route each option to the icon or to the pass-through node attributes."""
    result = SplitAttributes()
    for name, value in props.items():
        (result.icon if name in ICON_OPTIONS else result.node)[name] = value
    return result


def _is_true(value: Any) -> bool:
    return value is True or value in ('true', '1')


def _tokens(value: Any) -> List[str]:
    return [t for t in _TOKEN_SEPARATORS.split(str(value).lower()) if t]


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(0)) if match else 0


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def parse_rotation(value: Any) -> int:
    """Convert a rotate option to quarter turns.

    Numbers and unitless strings count quarter turns; "deg" and "%" values
    are rounded to the nearest quarter. Unknown units contribute nothing.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    if not isinstance(value, str):
        return 0

    units = _LEADING_NUMBER.sub('', value, count=1)
    if units == '':
        return _leading_int(value)
    if units == value:
        return 0

    step = _ROTATE_UNIT_STEPS.get(units)
    if step is None:
        return 0
    return _round_half_away(_leading_int(value[:-len(units)]) / step)


def parse_alignment(value: Any) -> Tuple[str, str, bool]:
    """Convert an align option to (horizontal, vertical, slice).

    Later tokens override earlier ones on the same axis; unknown tokens are
    ignored.
    """
    horizontal, vertical, slice_ = 'center', 'middle', False
    if value is None:
        return horizontal, vertical, slice_

    for token in _tokens(value):
        if token in _HORIZONTAL:
            horizontal = token
        elif token in _VERTICAL:
            vertical = token
        elif token == 'crop':
            slice_ = True
        elif token == 'meet':
            slice_ = False
    return horizontal, vertical, slice_


def preserve_aspect_ratio(horizontal: str, vertical: str, slice_: bool) -> str:
    """Build the preserveAspectRatio attribute value."""
    return _HORIZONTAL[horizontal] + _VERTICAL[vertical] + (' slice' if slice_ else ' meet')


def _bounding_rect(box: Box) -> str:
    rect = Rect(
        insert=(format_number(box.left), format_number(box.top)),
        size=(format_number(box.width), format_number(box.height)),
        fill="rgba(0, 0, 0, 0)",
        debug=False,
    )
    return rect.tostring()


class IconSVG:
    """Renderer for one resolved icon.

    Args:
        icon: Icon data with all defaults, e.g. from Collection.get_icon_data()
        config: Rendering defaults, RenderConfig() if None
    """

    def __init__(self, icon: Dict[str, Any], config: Optional[RenderConfig] = None):
        self.icon = icon
        self.config = config or RenderConfig()

    @classmethod
    def from_collection(cls, collection: Any, name: str,
                        config: Optional[RenderConfig] = None) -> Optional['IconSVG']:
        """Resolve `name` in a collection; None if it does not resolve."""
        data = collection.get_icon_data(name)
        if data is None:
            logger.debug("Icon %r not found in %r", name, collection.prefix)
            return None
        return cls(data, config)

    def _flips(self, props: Dict[str, Any]) -> Tuple[bool, bool]:
        h_flip = bool(self.icon['hFlip'])
        v_flip = bool(self.icon['vFlip'])
        if _is_true(props.get('hFlip')):
            h_flip = not h_flip
        if _is_true(props.get('vFlip')):
            v_flip = not v_flip
        if props.get('flip') is not None:
            for token in _tokens(props['flip']):
                if token == 'horizontal':
                    h_flip = not h_flip
                elif token == 'vertical':
                    v_flip = not v_flip
        return h_flip, v_flip

    def _dimensions(self, props: Dict[str, Any], box: Box) -> Tuple[Any, Any]:
        width = props.get('width')
        height = props.get('height')

        if width is None and height is None:
            height = self.config.default_height
        if width is not None and height is not None:
            return width, height
        if width is not None:
            return width, calculate_dimension(width, box.height / box.width, self.config.precision)
        return calculate_dimension(height, box.width / box.height, self.config.precision), height

    def get_attributes(self, props: Optional[Dict[str, Any]] = None) -> IconRenderData:
        """Compute <svg> attributes, style and body for the given icon options.

        Args:
            props: Icon options (see module docstring); other keys are ignored

        Returns:
            IconRenderData with width/height (when not suppressed),
            preserveAspectRatio and viewBox attributes
        """
        props = props or {}
        item = self.icon

        inline = _is_true(props.get('inline'))
        box = Box(
            left=item['left'],
            top=item['inlineTop'] if inline else item['top'],
            width=item['width'],
            height=item['inlineHeight'] if inline else item['height'],
        )

        h_flip, v_flip = self._flips(props)
        rotate = item['rotate']
        if props.get('rotate') is not None:
            rotate += parse_rotation(props['rotate'])

        transforms, box = compose_transforms(box, h_flip, v_flip, rotate)

        attributes: Dict[str, Any] = {}
        width, height = self._dimensions(props, box)
        if width is not False:
            attributes['width'] = box.width if width == 'auto' else width
        if height is not False:
            attributes['height'] = box.height if height == 'auto' else height

        style: Dict[str, str] = {}
        if inline and item['verticalAlign'] != 0:
            style['vertical-align'] = f"{format_number(item['verticalAlign'])}em"

        attributes['preserveAspectRatio'] = preserve_aspect_ratio(*parse_alignment(props.get('align')))
        attributes['viewBox'] = box.view_box

        body = replace_ids(item['body'], self.config.id_prefix)
        if props.get('color') is not None:
            body = body.replace('currentColor', str(props['color']))
        if transforms:
            body = f'<g transform="{" ".join(transforms)}">{body}</g>'
        if _is_true(props.get('box')):
            body += _bounding_rect(box)

        return IconRenderData(attributes=attributes, style=style, body=body)

    def get_svg(self, props: Optional[Dict[str, Any]] = None,
                add_extra: Optional[bool] = None) -> str:
        """Render complete <svg> markup.

        Args:
            props: Icon options plus any extra <svg> attributes
            add_extra: Emit non-icon props as attributes (RenderConfig.add_extra if None)

        Returns:
            SVG element as a string
        """
        props = props or {}
        if add_extra is None:
            add_extra = self.config.add_extra

        split = split_attributes(props)
        data = self.get_attributes(split.icon)

        svg = '<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink"'

        if add_extra:
            for attr, value in split.node.items():
                svg += f' {html.escape(str(attr))}="{html.escape(str(value))}"'

        for attr in ('width', 'height'):
            if attr in data.attributes:
                svg += f' {attr}="{format_number(data.attributes[attr])}"'

        style = "".join(f"{key}: {value};" for key, value in data.style.items()) + _ROTATE_FIX
        if props.get('style'):
            style += str(props['style'])
        svg += f' style="{style}"'

        svg += f' preserveAspectRatio="{data.attributes["preserveAspectRatio"]}"'
        svg += f' viewBox="{data.attributes["viewBox"]}"'
        svg += '>' + data.body + '</svg>'

        return svg

"""
Composition of flips and quarter-turn rotations into SVG transforms.

Transforms are returned in SVG order: the first entry is applied last, so a
rotation is placed in front of any flip transform.
"""

from dataclasses import dataclass, replace
from typing import List, Tuple, Union

from iconset.rendering.dimensions import format_number

Number = Union[int, float]


@dataclass
class Box:
    """Rectangle an icon is drawn in, in icon units."""
    left: Number = 0
    top: Number = 0
    width: Number = 16
    height: Number = 16

    @property
    def view_box(self) -> str:
        """Value for the viewBox attribute."""
        return " ".join(format_number(v) for v in (self.left, self.top, self.width, self.height))

    def swapped(self) -> 'Box':
        """Box turned by a quarter: x/y and width/height exchanged."""
        return Box(left=self.top, top=self.left, width=self.height, height=self.width)


def _fmt(*values: Number) -> str:
    return " ".join(format_number(v) for v in values)


def compose_transforms(
    box: Box,
    h_flip: bool = False,
    v_flip: bool = False,
    rotate: int = 0,
) -> Tuple[List[str], Box]:
    """Turn flip/rotate state into transform strings and the resulting box.

    Both flips together equal a half turn. A single flip mirrors the body
    into a box anchored at 0,0. A quarter turn is centred so that the
    rotated body lands in the swapped box.

    Args:
        box: Box before transformations (not modified)
        h_flip: Mirror horizontally
        v_flip: Mirror vertically
        rotate: Quarter turns clockwise, any integer

    Returns:
        (transforms, final box)
    """
    box = replace(box)
    transforms: List[str] = []

    if h_flip and v_flip:
        rotate += 2
    elif h_flip:
        transforms.append(f"translate({_fmt(box.width + box.left, 0 - box.top)})")
        transforms.append("scale(-1 1)")
        box.left = box.top = 0
    elif v_flip:
        transforms.append(f"translate({_fmt(0 - box.left, box.height + box.top)})")
        transforms.append("scale(1 -1)")
        box.left = box.top = 0

    turns = rotate % 4
    if turns == 1:
        center = box.height / 2 + box.top
        transforms.insert(0, f"rotate(90 {_fmt(center, center)})")
        box = box.swapped()
    elif turns == 2:
        transforms.insert(0, f"rotate(180 {_fmt(box.width / 2 + box.left, box.height / 2 + box.top)})")
    elif turns == 3:
        center = box.width / 2 + box.left
        transforms.insert(0, f"rotate(-90 {_fmt(center, center)})")
        box = box.swapped()

    return transforms, box

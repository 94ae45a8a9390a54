"""
BOM Domain - Text rendering of materialized trees.
"""

from typing import Optional

from .aggregates import PartTree
from .entities import Part

INDENT = "    "

# Every character str.splitlines() treats as a line boundary.
LINE_BOUNDARIES = "\n\r\x0b\x0c\x1c\x1d\x1e\x85\u2028\u2029"
LINE_BREAKS = str.maketrans({
    char: char.encode("unicode_escape").decode("ascii") for char in LINE_BOUNDARIES
})


def render_part(part: Part) -> str:
    """
    Render a single part as one line.

    Stored labels edited outside the API may hold line breaks; they are
    written as backslash escapes such as ``\\n``.
    """
    name = part.name.translate(LINE_BREAKS)
    number = part.number.translate(LINE_BREAKS)
    return f"Part Id: {part.id}, Name: {name}, Number: {number}"


def render(tree: Optional[PartTree]) -> str:
    """
    Render a materialized BOM as indented text.

    One line per part in pre-order, each tree level indented by ``INDENT``.
    Siblings keep the order in which the tree was loaded. An absent tree
    renders as an empty string.
    """
    if tree is None:
        return ""
    return "\n".join(
        f"{INDENT * depth}{render_part(part)}" for part, depth in tree.walk()
    )

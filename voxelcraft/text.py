"""Bitmap-font text laid out as textured quads."""

from __future__ import annotations

from typing import List, Tuple, Union

Vertex = Tuple[int, int, int, int]
"""A text vertex: screen x, screen y, glyph-sheet u, glyph-sheet v."""

GLYPHS_PER_ROW = 16


def _glyph_bytes(text: Union[str, bytes]) -> bytes:
    return text.encode("utf-8") if isinstance(text, str) else bytes(text)


def get_2d_position_from_index(index: int) -> Tuple[int, int]:
    """Cell of a glyph on the 16-wide glyph sheet, as (column, row)."""
    index &= 0xFF
    return (index % GLYPHS_PER_ROW, index // GLYPHS_PER_ROW)


def get_text_width(text: Union[str, bytes], char_width: int) -> int:
    """Width of ``text`` when every glyph is ``char_width`` wide."""
    return len(_glyph_bytes(text)) * char_width


def write_text_vertices(text: Union[str, bytes], char_width: int, char_height: int) -> List[Vertex]:
    """Four vertices per glyph, laid out left to right from the origin."""
    vertices: List[Vertex] = []
    x = 0
    for glyph in _glyph_bytes(text):
        u, v = get_2d_position_from_index(glyph)
        x_end = x + char_width
        vertices.extend(
            [
                (x, 0, u, v),
                (x_end, 0, u + 1, v),
                (x_end, char_height, u + 1, v + 1),
                (x, char_height, u, v + 1),
            ]
        )
        x = x_end
    return vertices
"""On-screen overlay with frame rate, position, direction and timings."""

from __future__ import annotations

import struct
from typing import List, Sequence, Tuple

from .display_list import DisplayList, begin_instruction_size, vector_instruction_size
from .input import Button
from .text import Vertex, get_text_width, write_text_vertices

UI_VERTEX_FORMAT_INDEX = 2
_QUADS = 0x80

FPS_PREFIX = "FPS: "
POS_PREFIX = "POS: "
DIR_PREFIX = "DIR: "
BGT_PREFIX = "BGT: "
MGT_PREFIX = "MGT: "
MGL_PREFIX = "MGL: "
PREFIXES = (FPS_PREFIX, POS_PREFIX, DIR_PREFIX, BGT_PREFIX, MGT_PREFIX, MGL_PREFIX)

CHAR_SIZE = 16


def _format_vec3(v: Sequence[float]) -> str:
    return " ".join(format(float(c), "g") for c in v)


def _offset_vertices(vertices: List[Vertex], dx: int, dy: int) -> List[Vertex]:
    return [(x + dx, y + dy, u, v) for x, y, u, v in vertices]


def _record_text(text: str, y_offset: int) -> DisplayList:
    vertices = _offset_vertices(write_text_vertices(text, CHAR_SIZE, CHAR_SIZE), 0, CHAR_SIZE * y_offset)
    count = len(vertices)
    display_list = DisplayList()
    display_list.resize(
        begin_instruction_size(count)
        + vector_instruction_size(2, 2, count)
        + vector_instruction_size(2, 1, count)
    )
    data = bytearray(struct.pack(">BH", _QUADS | UI_VERTEX_FORMAT_INDEX, count))
    for x, y, u, v in vertices:
        data.extend(struct.pack(">HHBB", x, y, u, v))
    display_list.write(bytes(data))
    return display_list


class DebugUI:
    """Labels recorded once, values laid out each frame."""

    matrix_index = 2
    char_size = CHAR_SIZE
    prefix_width = get_text_width(FPS_PREFIX, CHAR_SIZE)

    def __init__(self) -> None:
        self.position: Tuple[float, float] = (10.0, 20.0)
        self.prefix_display_lists: List[DisplayList] = [
            _record_text(prefix, line) for line, prefix in enumerate(PREFIXES)
        ]
        self.draw_extra_info = False

    def update(self, buttons_down: int) -> None:
        """Toggle the extra lines when the 2 button is pressed."""
        if buttons_down & Button.TWO:
            self.draw_extra_info = not self.draw_extra_info

    @property
    def visible_prefix_display_lists(self) -> List[DisplayList]:
        """The label lists drawn in the current mode."""
        if self.draw_extra_info:
            return list(self.prefix_display_lists)
        return self.prefix_display_lists[:1]

    def lines(
        self,
        pos: Sequence[float],
        direction: Sequence[float],
        total_procedural_gen_time: int,
        total_visual_gen_time: int,
        last_visual_gen_time: int,
        fps: int,
    ) -> List[str]:
        """The value text of each visible line, top to bottom."""
        fps_str = str(int(fps))
        if not self.draw_extra_info:
            return [fps_str]
        return [
            fps_str,
            _format_vec3(pos),
            _format_vec3(direction),
            str(int(total_procedural_gen_time)),
            str(int(total_visual_gen_time)),
            str(int(last_visual_gen_time)),
        ]

    def vertices(self, lines: Sequence[str]) -> List[Vertex]:
        """Quad vertices of the value text, placed right of the labels."""
        out: List[Vertex] = []
        for index, line in enumerate(lines):
            out.extend(
                _offset_vertices(
                    write_text_vertices(line, self.char_size, self.char_size),
                    self.prefix_width,
                    self.char_size * index,
                )
            )
        return out
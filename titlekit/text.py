"""Text layout: line wrapping and measurement, color blending and the color table."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Mapping

from .errors import InvalidArgumentError

MAX_LINES = 64
MAX_COLORS = 32
COLOR_TEXT = 0
REFERENCE_CELL_HEIGHT = 30.0
DEFAULT_TEXT_COLOR = 0xFF000000


@dataclass(frozen=True)
class FontMetrics:
    """Glyph advance widths and line spacing of a font."""

    line_feed: float
    cell_height: float = REFERENCE_CELL_HEIGHT
    default_width: float = 1.0
    widths: Mapping[str, float] = field(default_factory=dict)

    @property
    def scale(self) -> float:
        return REFERENCE_CELL_HEIGHT / self.cell_height

    def char_width(self, ch: str) -> float:
        return self.widths.get(ch, self.default_width)


@dataclass
class WrapResult:
    """Character counts, widths and heights of laid-out lines, and overall size."""

    lines: list[int] = field(default_factory=list)
    line_widths: list[float] = field(default_factory=list)
    line_heights: list[float] = field(default_factory=list)
    width: float = 0.0
    height: float = 0.0

    @property
    def num_lines(self) -> int:
        return len(self.lines)


class _Layout:
    def __init__(self, max_lines: int) -> None:
        self.result = WrapResult()
        self.max_lines = max_lines
        self.line_width = 0.0
        self.line_height = 0.0
        self.line_pos = 0
        self.last_align = 0

    def finish_line(self) -> None:
        result = self.result
        result.width = max(result.width, self.line_width)
        result.height += self.line_height
        if len(result.lines) < self.max_lines:
            result.lines.append(self.line_pos)
            result.line_widths.append(self.line_width)
            result.line_heights.append(self.line_height)
        self.line_width = 0.0
        self.line_height = 0.0
        self.line_pos = 0
        self.last_align = 0


def wrap_string(
    text: str,
    metrics: FontMetrics,
    max_lines: int = MAX_LINES,
    max_width: float = 0.0,
    scale_x: float = 1.0,
    scale_y: float = 1.0,
    word_wrap: bool = False,
) -> WrapResult:
    """Split text into lines, breaking at newlines and, if asked, before overlong words."""
    scale_x *= metrics.scale
    scale_y *= metrics.scale
    line_feed = scale_y * metrics.line_feed

    layout = _Layout(max_lines)
    word_pos = -1
    word_width = 0.0

    for ch in text.partition("\0")[0]:
        advance = 1.0
        if ch == "\t":
            ch = " "
            advance = 4 - (layout.line_pos - layout.last_align) % 4
            layout.last_align = layout.line_pos
        advance *= scale_x * metrics.char_width(ch)

        newline = ch == "\n"
        if newline or (word_wrap and layout.line_width + advance >= max_width):
            if newline:
                layout.line_pos += 1
                layout.line_height = line_feed

            old_pos = layout.line_pos
            carry = not newline and word_pos != -1
            if carry:
                layout.line_pos = word_pos
                layout.line_width -= word_width

            layout.finish_line()

            if carry:
                layout.line_pos = old_pos - word_pos
                layout.line_width = word_width

            word_pos = -1
            word_width = 0.0

        if ch == " ":
            word_pos = -1
            word_width = 0.0
        elif word_pos == -1:
            word_pos = layout.line_pos
            word_width = 0.0

        if not newline:
            if word_pos != -1:
                word_width += advance
            layout.line_width += advance
            layout.line_height = line_feed
            layout.line_pos += 1

    if layout.line_pos > 0:
        layout.finish_line()

    return layout.result


def string_size(text: str, metrics: FontMetrics, scale_x: float = 1.0, scale_y: float = 1.0) -> tuple[float, float]:
    """Return the (width, height) of text without wrapping."""
    result = wrap_string(text, metrics, 0, 0.0, scale_x, scale_y, False)
    return result.width, result.height


def string_size_wrap(
    text: str, metrics: FontMetrics, scale_x: float, scale_y: float, wrap_width: float
) -> tuple[float, float]:
    """Return the (width, height) of text wrapped at ``wrap_width``."""
    result = wrap_string(text, metrics, 0, wrap_width, scale_x, scale_y, True)
    return result.width, result.height


def _f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def blend_color(color: int, base_alpha: int) -> int:
    """Multiply a color's alpha by a base alpha, both as 8-bit values."""
    if base_alpha == 0xFF:
        return color
    alpha1 = _f32(((color >> 24) & 0xFF) / 255.0)
    alpha2 = _f32(base_alpha / 255.0)
    blended = _f32(alpha1 * alpha2)
    return ((int(_f32(blended * 0xFF)) & 0xFF) << 24) | (color & 0x00FFFFFF)


class ColorTable:
    """The colors text may be drawn in, by color ID."""

    def __init__(self) -> None:
        self._colors = [0] * MAX_COLORS
        self._colors[COLOR_TEXT] = DEFAULT_TEXT_COLOR

    def _check(self, color_id: int) -> None:
        if not 0 <= color_id < MAX_COLORS:
            raise InvalidArgumentError(f"invalid color ID {color_id}")

    def set(self, color_id: int, color: int) -> None:
        self._check(color_id)
        self._colors[color_id] = color & 0xFFFFFFFF

    def get(self, color_id: int) -> int:
        self._check(color_id)
        return self._colors[color_id]
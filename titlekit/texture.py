"""Texture sizing, pixel layout conversion and texture slot bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidArgumentError

MAX_TEXTURES = 1024
MIN_TEXTURE_SIZE = 64
_TILE = 8
_U32 = 0xFFFFFFFF


def next_pow2(value: int) -> int:
    """Return the smallest power of two not below ``value``, in 32-bit arithmetic."""
    value &= _U32
    if value == 0:
        return 0
    return (1 << (value - 1).bit_length()) & _U32


def texture_dimensions(width: int, height: int) -> tuple[int, int]:
    """Return the power-of-two texture size that holds a ``width`` x ``height`` image."""
    return (
        max(next_pow2(width), MIN_TEXTURE_SIZE),
        max(next_pow2(height), MIN_TEXTURE_SIZE),
    )


def tile_rows(data: bytes, width: int, height: int, pixel_size: int) -> bytes:
    """Place already tiled image data into a power-of-two texture buffer."""
    tex_width, tex_height = texture_dimensions(width, height)
    size = tex_width * tex_height * pixel_size
    if width == tex_width and height == tex_height:
        return bytes(data[:size]).ljust(size, b"\0")

    out = bytearray(size)
    row_bytes = width * _TILE * pixel_size
    for y in range(0, height, _TILE):
        dst = y * tex_width * pixel_size
        src = y * width * pixel_size
        chunk = bytes(data[src:src + row_bytes])[:max(size - dst, 0)]
        out[dst:dst + len(chunk)] = chunk
    return bytes(out)


def _morton(x: int, y: int) -> int:
    return (
        (x & 1)
        | ((y & 1) << 1)
        | ((x & 2) << 1)
        | ((y & 2) << 2)
        | ((x & 4) << 2)
        | ((y & 4) << 3)
    )


def swizzle(data: bytes, width: int, height: int, pixel_size: int) -> bytes:
    """Convert row-major pixels into the 8x8 Morton-tiled texture layout."""
    tex_width, tex_height = texture_dimensions(width, height)
    out = bytearray(tex_width * tex_height * pixel_size)
    tiles_per_row = tex_width >> 3
    for y in range(height):
        for x in range(width):
            tile = (y >> 3) * tiles_per_row + (x >> 3)
            dst = ((tile << 6) + _morton(x, y)) * pixel_size
            src = (y * width + x) * pixel_size
            out[dst:dst + pixel_size] = data[src:src + pixel_size]
    return bytes(out)


def rgba_to_abgr(image: bytes) -> bytes:
    """Reverse the byte order of every 4-byte pixel."""
    if len(image) % 4 != 0:
        raise ValueError("image length is not a multiple of 4")
    out = bytearray(image)
    for pos in range(0, len(out), 4):
        out[pos:pos + 4] = out[pos:pos + 4][::-1]
    return bytes(out)


def texture_coords(texture_width: int, texture_height: int, width: int, height: int) -> tuple[float, float, float, float]:
    """Return (left, bottom, right, top) texture coordinates of an image in its texture."""
    return (
        0.0,
        (texture_height - height) / texture_height,
        width / texture_width,
        1.0,
    )


@dataclass
class _Slot:
    allocated: bool = False
    loaded: bool = False
    width: int = 0
    height: int = 0


class TextureSlots:
    """A fixed table of texture slots; slot 0 is never handed out."""

    def __init__(self, count: int = MAX_TEXTURES) -> None:
        self._slots = [_Slot() for _ in range(count)]

    def _slot(self, slot: int) -> _Slot:
        if not 0 <= slot < len(self._slots):
            raise InvalidArgumentError(f"invalid texture ID {slot}")
        return self._slots[slot]

    def allocate_free(self) -> int:
        """Reserve and return the first free slot."""
        for number, entry in enumerate(self._slots):
            if number == 0:
                continue
            if not entry.allocated:
                entry.allocated = True
                return number
        raise RuntimeError("out of free textures")

    def load(self, slot: int, width: int, height: int) -> tuple[int, int]:
        """Record an image in a slot and return the texture size it needs."""
        entry = self._slot(slot)
        entry.allocated = True
        entry.loaded = True
        entry.width = width
        entry.height = height
        return texture_dimensions(width, height)

    def unload(self, slot: int) -> None:
        entry = self._slot(slot)
        entry.allocated = False
        entry.loaded = False
        entry.width = 0
        entry.height = 0

    def size(self, slot: int) -> tuple[int, int]:
        entry = self._slot(slot)
        return entry.width, entry.height
"""DS banner parsing and title language selection."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Optional

from ..errors import BadDataError, OutOfRangeError
from ..stringutil import is_empty
from .smdh import DEFAULT_LANGUAGES, Language

BANNER_SIZE = 0x23C0
BANNER_MIN_SIZE = 0x840
_TITLES_POS = 0x240
_TITLE_SIZE = 0x100
_TITLE_COUNT = 16
_FRAMES_POS = 0x1240
_FRAME_SIZE = 0x200
_FRAME_PALETTES_POS = 0x2240
_PALETTE_SIZE = 0x20
_FRAME_COUNT = 8
_SEQUENCE_POS = 0x2340


def _utf16(raw: bytes) -> str:
    return raw.decode("utf-16-le", errors="replace").partition("\0")[0]


@dataclass(frozen=True)
class Banner:
    version: int
    animated: bool
    crc16: tuple[int, ...]
    main_icon_bitmap: bytes
    main_icon_palette: tuple[int, ...]
    titles: tuple[str, ...]
    animated_frame_bitmaps: tuple[bytes, ...]
    animated_frame_palettes: tuple[tuple[int, ...], ...]
    animation_sequence: tuple[int, ...]

    @classmethod
    def from_bytes(cls, data: bytes) -> Banner:
        """Parse a banner; shorter, older versions are padded with zeros."""
        if len(data) < BANNER_MIN_SIZE:
            raise BadDataError(f"banner needs at least {BANNER_MIN_SIZE} bytes, got {len(data)}")
        buf = bytes(data[:BANNER_SIZE]).ljust(BANNER_SIZE, b"\0")
        return cls(
            version=buf[0],
            animated=buf[1] != 0,
            crc16=struct.unpack_from("<4H", buf, 2),
            main_icon_bitmap=buf[0x20:0x220],
            main_icon_palette=struct.unpack_from("<16H", buf, 0x220),
            titles=tuple(
                _utf16(buf[start:start + _TITLE_SIZE])
                for start in range(_TITLES_POS, _TITLES_POS + _TITLE_COUNT * _TITLE_SIZE, _TITLE_SIZE)
            ),
            animated_frame_bitmaps=tuple(
                buf[start:start + _FRAME_SIZE]
                for start in range(_FRAMES_POS, _FRAMES_POS + _FRAME_COUNT * _FRAME_SIZE, _FRAME_SIZE)
            ),
            animated_frame_palettes=tuple(
                struct.unpack_from("<16H", buf, start)
                for start in range(
                    _FRAME_PALETTES_POS, _FRAME_PALETTES_POS + _FRAME_COUNT * _PALETTE_SIZE, _PALETTE_SIZE
                )
            ),
            animation_sequence=struct.unpack_from("<64H", buf, _SEQUENCE_POS),
        )


def select_title(banner: Banner, language: Optional[int] = None, region: Optional[int] = None) -> str:
    """Pick the title for the system language, falling back to the region's default."""
    if language is not None:
        if not 0 <= language < len(banner.titles):
            raise OutOfRangeError(f"unknown language {language}")
        if not is_empty(banner.titles[language]):
            return banner.titles[language]
    if region is None:
        return banner.titles[Language.JP]
    if not 0 <= region < len(DEFAULT_LANGUAGES):
        raise OutOfRangeError(f"unknown region {region}")
    return banner.titles[DEFAULT_LANGUAGES[region]]
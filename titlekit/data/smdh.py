"""SMDH icon/metadata parsing, region names and title language selection."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import Optional

from ..errors import BadDataError, OutOfRangeError
from ..stringutil import is_empty

SMDH_SIZE = 0x36C0
_TITLES_POS = 0x08
_TITLE_SIZE = 0x200
_TITLE_COUNT = 0x10
_RATINGS_POS = 0x2008
_TAIL_POS = 0x2018
_TAIL_FORMAT = "<IIQIHHIIQ"
_SMALL_ICON_POS = 0x2040
_SMALL_ICON_SIZE = 0x480
_LARGE_ICON_POS = 0x24C0
_LARGE_ICON_SIZE = 0x1200

REGION_COUNT = 7
ALL_REGIONS = 0x7F

REGION_NAMES = ("일본", "북미", "유럽", "호주", "중국", "대한민국", "대만")
UNKNOWN_REGION = "알 수 없음"
REGION_FREE = "리전 프리"


class Language(enum.IntEnum):
    JP = 0
    EN = 1
    FR = 2
    DE = 3
    IT = 4
    ES = 5
    ZH = 6
    KO = 7
    NL = 8
    PT = 9
    RU = 10
    TW = 11


class Region(enum.IntEnum):
    JPN = 0
    USA = 1
    EUR = 2
    AUS = 3
    CHN = 4
    KOR = 5
    TWN = 6


DEFAULT_LANGUAGES = (
    Language.JP,
    Language.EN,
    Language.EN,
    Language.EN,
    Language.ZH,
    Language.KO,
    Language.ZH,
)


def _utf16(raw: bytes) -> str:
    return raw.decode("utf-16-le", errors="replace").partition("\0")[0]


@dataclass(frozen=True)
class SmdhTitle:
    short_description: str
    long_description: str
    publisher: str


@dataclass(frozen=True)
class Smdh:
    magic: bytes
    version: int
    titles: tuple[SmdhTitle, ...]
    ratings: bytes
    region: int
    match_maker_id: int
    match_maker_bit_id: int
    flags: int
    eula_version: int
    optimal_banner_frame: int
    streetpass_id: int
    small_icon: bytes
    large_icon: bytes

    @classmethod
    def from_bytes(cls, data: bytes) -> Smdh:
        if len(data) < SMDH_SIZE:
            raise BadDataError(f"SMDH needs {SMDH_SIZE} bytes, got {len(data)}")
        buf = bytes(data[:SMDH_SIZE])
        titles = []
        for number in range(_TITLE_COUNT):
            base = _TITLES_POS + number * _TITLE_SIZE
            titles.append(SmdhTitle(
                short_description=_utf16(buf[base:base + 0x80]),
                long_description=_utf16(buf[base + 0x80:base + 0x180]),
                publisher=_utf16(buf[base + 0x180:base + 0x200]),
            ))
        (region, match_maker_id, match_maker_bit_id, flags, eula_version, _reserved,
         optimal_banner_frame, streetpass_id, _reserved2) = struct.unpack_from(_TAIL_FORMAT, buf, _TAIL_POS)
        return cls(
            magic=buf[0:4],
            version=struct.unpack_from("<H", buf, 4)[0],
            titles=tuple(titles),
            ratings=buf[_RATINGS_POS:_RATINGS_POS + 0x10],
            region=region,
            match_maker_id=match_maker_id,
            match_maker_bit_id=match_maker_bit_id,
            flags=flags,
            eula_version=eula_version,
            optimal_banner_frame=optimal_banner_frame,
            streetpass_id=streetpass_id,
            small_icon=buf[_SMALL_ICON_POS:_SMALL_ICON_POS + _SMALL_ICON_SIZE],
            large_icon=buf[_LARGE_ICON_POS:_LARGE_ICON_POS + _LARGE_ICON_SIZE],
        )


def region_to_string(region: int) -> str:
    """Describe a region bit mask in words."""
    if region == 0:
        return UNKNOWN_REGION
    if region & ALL_REGIONS == ALL_REGIONS:
        return REGION_FREE
    return ", ".join(name for bit, name in enumerate(REGION_NAMES) if region & (1 << bit))


def _default_language(region: Optional[int]) -> Language:
    if region is None:
        return Language.JP
    if not 0 <= region < len(DEFAULT_LANGUAGES):
        raise OutOfRangeError(f"unknown region {region}")
    return DEFAULT_LANGUAGES[region]


def select_title(smdh: Smdh, language: Optional[int] = None, region: Optional[int] = None) -> SmdhTitle:
    """Pick the title for the system language, falling back to the region's default."""
    if language is not None:
        if not 0 <= language < len(smdh.titles):
            raise OutOfRangeError(f"unknown language {language}")
        if not is_empty(smdh.titles[language].short_description):
            return smdh.titles[language]
    return smdh.titles[_default_language(region)]
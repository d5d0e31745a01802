import struct

import pytest

from titlekit.data.bnr import BANNER_MIN_SIZE, BANNER_SIZE, Banner, select_title
from titlekit.data.smdh import Language, Region
from titlekit.errors import BadDataError, OutOfRangeError


def make_banner(titles, size=BANNER_SIZE, version=3, animated=True):
    buf = bytearray(size)
    buf[0] = version
    buf[1] = 1 if animated else 0
    struct.pack_into("<H", buf, 2, 0xBEEF)
    for number, title in titles.items():
        start = 0x240 + number * 0x100
        encoded = title.encode("utf-16-le")
        buf[start:start + len(encoded)] = encoded
    return bytes(buf)


def test_parse_round_trip():
    banner = Banner.from_bytes(make_banner({Language.EN: "Hello\nWorld"}))
    assert banner.version == 3
    assert banner.animated is True
    assert banner.crc16[0] == 0xBEEF
    assert banner.titles[Language.EN] == "Hello\nWorld"
    assert len(banner.titles) == 16
    assert len(banner.animated_frame_bitmaps) == 8
    assert len(banner.animation_sequence) == 64


def test_short_banner_is_padded():
    banner = Banner.from_bytes(make_banner({Language.JP: "Title"}, size=BANNER_MIN_SIZE, version=1, animated=False))
    assert banner.titles[Language.JP] == "Title"
    assert banner.titles[Language.KO] == ""
    assert banner.animated is False


def test_too_short():
    with pytest.raises(BadDataError):
        Banner.from_bytes(b"\0" * (BANNER_MIN_SIZE - 1))


def test_select_title_uses_language():
    banner = Banner.from_bytes(make_banner({Language.DE: "Deutsch", Language.JP: "Japan"}))
    assert select_title(banner, Language.DE, Region.EUR) == "Deutsch"


def test_select_title_falls_back_to_region():
    banner = Banner.from_bytes(make_banner({Language.EN: "English"}))
    assert select_title(banner, Language.FR, Region.USA) == "English"


def test_select_title_without_region():
    banner = Banner.from_bytes(make_banner({Language.JP: "Japan"}))
    assert select_title(banner, None, None) == "Japan"


def test_select_title_bad_region():
    banner = Banner.from_bytes(make_banner({}))
    with pytest.raises(OutOfRangeError):
        select_title(banner, Language.EN, 12)
"""Field access for title metadata (TMD) blobs."""

from __future__ import annotations

import struct

from ..errors import BadDataError, InvalidArgumentError

SIGNATURE_SIZES = (0x240, 0x140, 0x80, 0x240, 0x140, 0x80)

_TITLE_ID_POS = 0x4C
_CONTENT_COUNT_POS = 0x9E
_CONTENT_CHUNKS_POS = 0x9C4
_CONTENT_CHUNK_SIZE = 0x30


def _field(tmd: bytes | None, pos: int, fmt: str) -> int:
    if tmd is None:
        raise InvalidArgumentError("no TMD data")
    if len(tmd) < 4:
        raise BadDataError("TMD too short")
    sig_type = tmd[3]
    if sig_type >= len(SIGNATURE_SIZES):
        raise BadDataError(f"unknown signature type {sig_type}")
    offset = SIGNATURE_SIZES[sig_type] + pos
    if offset + struct.calcsize(fmt) > len(tmd):
        raise BadDataError("TMD field lies past the end of the data")
    return struct.unpack_from(fmt, tmd, offset)[0]


def _chunk_pos(num: int) -> int:
    if num < 0:
        raise InvalidArgumentError(f"negative content number {num}")
    return _CONTENT_CHUNKS_POS + num * _CONTENT_CHUNK_SIZE


def get_title_id(tmd: bytes) -> int:
    return _field(tmd, _TITLE_ID_POS, ">Q")


def get_content_count(tmd: bytes) -> int:
    return _field(tmd, _CONTENT_COUNT_POS, ">H")


def get_content_id(tmd: bytes, num: int) -> int:
    return _field(tmd, _chunk_pos(num), ">I")


def get_content_index(tmd: bytes, num: int) -> int:
    return _field(tmd, _chunk_pos(num) + 4, ">H")
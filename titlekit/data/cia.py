"""Reading title IDs and SMDH metadata from CIA files."""

from __future__ import annotations

import struct
from typing import BinaryIO

from ..errors import BadDataError, InvalidArgumentError
from . import tmd
from .smdh import SMDH_SIZE, Smdh

_META_MIN_SIZE = 0x3AC0
_META_SMDH_OFFSET = 0x400
_U32 = 0xFFFFFFFF
_U64 = 0xFFFFFFFFFFFFFFFF


def _align(value: int, mask: int = _U32) -> int:
    return (value + 0x3F) & ~0x3F & mask


def get_title_id(cia: bytes) -> int:
    """Return the title ID from the TMD embedded in a CIA image."""
    if cia is None:
        raise InvalidArgumentError("no CIA data")
    if len(cia) < 0x10:
        raise BadDataError("CIA too short")
    header_size, _, cert_size, ticket_size = struct.unpack_from("<4I", cia, 0)
    offset = (_align(header_size) + _align(cert_size) + _align(ticket_size)) & _U32
    if offset >= len(cia):
        raise BadDataError("CIA TMD lies past the end of the data")
    return tmd.get_title_id(bytes(cia[offset:]))


def read_smdh(stream: BinaryIO) -> Smdh:
    """Read the SMDH stored in the meta section of a seekable CIA stream."""
    if stream is None:
        raise InvalidArgumentError("no CIA stream")
    stream.seek(0)
    header = stream.read(32)
    if len(header) < 32:
        raise BadDataError("CIA header too short")
    words = struct.unpack("<8I", header)
    header_size = _align(words[0])
    cert_size = _align(words[2])
    ticket_size = _align(words[3])
    tmd_size = _align(words[4])
    meta_size = _align(words[5])
    content_size = _align(words[6] | (words[7] << 32), _U64)

    if meta_size < _META_MIN_SIZE:
        raise BadDataError("CIA has no SMDH meta section")

    offset = ((header_size + cert_size + ticket_size + tmd_size) & _U32) + content_size + _META_SMDH_OFFSET
    stream.seek(offset & _U64)
    return Smdh.from_bytes(stream.read(SMDH_SIZE))
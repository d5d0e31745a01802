"""Field access for ticket blobs."""

from __future__ import annotations

import struct

from ..errors import BadDataError, InvalidArgumentError
from .tmd import SIGNATURE_SIZES

_TITLE_ID_POS = 0x9C


def get_title_id(ticket: bytes) -> int:
    """Return the big-endian title ID stored in a ticket."""
    if ticket is None:
        raise InvalidArgumentError("no ticket data")
    if len(ticket) < 4:
        raise BadDataError("ticket too short")
    sig_type = ticket[3]
    if sig_type >= len(SIGNATURE_SIZES):
        raise BadDataError(f"unknown signature type {sig_type}")
    offset = SIGNATURE_SIZES[sig_type] + _TITLE_ID_POS
    if offset + 8 > len(ticket):
        raise BadDataError("ticket too short for its title ID")
    return struct.unpack_from(">Q", ticket, offset)[0]
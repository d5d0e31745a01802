"""Save-chip access over SPI: chip detection, capacities, and paged reads and writes."""

from __future__ import annotations

import enum
from typing import Protocol

from .errors import BadDataError, NotImplementedResult

CMD_RDSR = 0x05
CMD_WREN = 0x06
CMD_RDID = 0x9F

EEPROM_512B_CMD_WRLO = 0x02
EEPROM_512B_CMD_RDLO = 0x03
EEPROM_512B_CMD_WRHI = 0x0A
EEPROM_512B_CMD_RDHI = 0x0B

EEPROM_CMD_WRITE = 0x02
EEPROM_CMD_READ = 0x03

FLASH_CMD_READ = 0x03
FLASH_CMD_PW = 0x0A

STAT_WIP = 0x01
STAT_WEL = 0x02

_EEPROM_512B_HALF = 0x100
_EEPROM_512B_END = 0x200


class SaveChip(enum.IntEnum):
    NONE = 0
    EEPROM_512B = 1
    EEPROM_8KB = 2
    EEPROM_64KB = 3
    EEPROM_128KB = 4
    FLASH_256KB = 5
    FLASH_512KB = 6
    FLASH_1MB = 7
    FLASH_8MB = 8
    FLASH_256KB_INFRARED = 9
    FLASH_512KB_INFRARED = 10
    FLASH_1MB_INFRARED = 11
    FLASH_8MB_INFRARED = 12


class SpiTransport(Protocol):
    """Sends one command to the card and returns ``answer_size`` answer bytes."""

    def transfer(self, command: bytes, answer_size: int, data: bytes, infrared: bool) -> bytes:
        ...


_INFRARED = frozenset({
    SaveChip.FLASH_256KB_INFRARED,
    SaveChip.FLASH_512KB_INFRARED,
    SaveChip.FLASH_1MB_INFRARED,
    SaveChip.FLASH_8MB_INFRARED,
})

_PAGE_SIZES = {
    SaveChip.EEPROM_512B: 16,
    SaveChip.EEPROM_8KB: 32,
    SaveChip.EEPROM_64KB: 128,
    SaveChip.EEPROM_128KB: 256,
    SaveChip.FLASH_256KB: 256,
    SaveChip.FLASH_512KB: 256,
    SaveChip.FLASH_1MB: 256,
    SaveChip.FLASH_8MB: 256,
    SaveChip.FLASH_256KB_INFRARED: 256,
    SaveChip.FLASH_512KB_INFRARED: 256,
    SaveChip.FLASH_1MB_INFRARED: 256,
    SaveChip.FLASH_8MB_INFRARED: 256,
}

_CAPACITIES = {
    SaveChip.EEPROM_512B: 512,
    SaveChip.EEPROM_8KB: 8 * 1024,
    SaveChip.EEPROM_64KB: 64 * 1024,
    SaveChip.EEPROM_128KB: 128 * 1024,
    SaveChip.FLASH_256KB: 256 * 1024,
    SaveChip.FLASH_256KB_INFRARED: 256 * 1024,
    SaveChip.FLASH_512KB: 512 * 1024,
    SaveChip.FLASH_512KB_INFRARED: 512 * 1024,
    SaveChip.FLASH_1MB: 1024 * 1024,
    SaveChip.FLASH_1MB_INFRARED: 1024 * 1024,
    SaveChip.FLASH_8MB: 8 * 1024 * 1024,
    SaveChip.FLASH_8MB_INFRARED: 8 * 1024 * 1024,
}

# JEDEC IDs mapped to the flash size step above FLASH_256KB.
_FLASH_JEDEC_STEPS = {
    0x204012: 0,
    0x621600: 0,
    0x204013: SaveChip.FLASH_512KB - SaveChip.FLASH_256KB,
    0x621100: SaveChip.FLASH_512KB - SaveChip.FLASH_256KB,
    0x204014: SaveChip.FLASH_1MB - SaveChip.FLASH_256KB,
    0x202017: SaveChip.FLASH_8MB - SaveChip.FLASH_256KB,
    0x204017: SaveChip.FLASH_8MB - SaveChip.FLASH_256KB,
}


def page_size(chip: SaveChip) -> int:
    """Return the write page size of a chip."""
    try:
        return _PAGE_SIZES[chip]
    except KeyError:
        raise NotImplementedResult(f"no page size for chip {chip!r}") from None


def capacity(chip: SaveChip) -> int:
    """Return the storage capacity of a chip in bytes."""
    try:
        return _CAPACITIES[chip]
    except KeyError:
        raise NotImplementedResult(f"no capacity for chip {chip!r}") from None


def _address(pos: int, width: int) -> bytes:
    return (pos & ((1 << (8 * width)) - 1)).to_bytes(width, "big")


def _execute(transport: SpiTransport, chip: SaveChip, command: bytes,
             answer_size: int = 0, data: bytes = b"") -> bytes:
    if chip == SaveChip.NONE:
        raise NotImplementedResult("no save chip")
    answer = bytes(transport.transfer(bytes(command), answer_size, bytes(data), chip in _INFRARED) or b"")
    if len(answer) < answer_size:
        raise BadDataError(f"expected {answer_size} answer bytes, got {len(answer)}")
    return answer[:answer_size]


def _status(transport: SpiTransport, chip: SaveChip) -> int:
    return _execute(transport, chip, bytes([CMD_RDSR]), 1)[0]


def _wait_write_finish(transport: SpiTransport, chip: SaveChip) -> None:
    while _status(transport, chip) & STAT_WIP:
        pass


def _read_jedec_id_status(transport: SpiTransport, chip: SaveChip) -> tuple[int, int]:
    _wait_write_finish(transport, chip)
    jedec_id = int.from_bytes(_execute(transport, chip, bytes([CMD_RDID]), 3), "big")
    return jedec_id, _status(transport, chip)


def _clamp(offset: int, size: int, cap: int) -> int:
    # An offset past the end is left unclamped; mirror probing depends on it.
    if offset <= cap and size > cap - offset:
        return cap - offset
    return size


def _read_data(transport: SpiTransport, chip: SaveChip, offset: int, size: int) -> bytes:
    size = _clamp(offset, size, capacity(chip))
    if size <= 0:
        return b""

    _wait_write_finish(transport, chip)
    pos = offset

    if chip == SaveChip.EEPROM_512B:
        out = bytearray()
        if pos < _EEPROM_512B_HALF:
            length = min(size, _EEPROM_512B_HALF - pos)
            out += _execute(transport, chip, bytes([EEPROM_512B_CMD_RDLO, pos & 0xFF]), length)
            pos += length
            size -= length
        if pos >= _EEPROM_512B_HALF and size > 0:
            length = min(size, max(_EEPROM_512B_END - pos, 0))
            out += _execute(transport, chip, bytes([EEPROM_512B_CMD_RDHI, pos & 0xFF]), length)
        return bytes(out)

    if chip in (SaveChip.EEPROM_8KB, SaveChip.EEPROM_64KB):
        command = bytes([EEPROM_CMD_READ]) + _address(pos, 2)
    elif chip == SaveChip.EEPROM_128KB:
        command = bytes([EEPROM_CMD_READ]) + _address(pos, 3)
    else:
        command = bytes([FLASH_CMD_READ]) + _address(pos, 3)
    return _execute(transport, chip, command, size)


def _write_command(chip: SaveChip, pos: int) -> bytes:
    if chip == SaveChip.EEPROM_512B:
        opcode = EEPROM_512B_CMD_WRHI if pos >= _EEPROM_512B_HALF else EEPROM_512B_CMD_WRLO
        return bytes([opcode, pos & 0xFF])
    if chip in (SaveChip.EEPROM_8KB, SaveChip.EEPROM_64KB):
        return bytes([EEPROM_CMD_WRITE]) + _address(pos, 2)
    if chip == SaveChip.EEPROM_128KB:
        return bytes([EEPROM_CMD_WRITE]) + _address(pos, 3)
    if chip in (SaveChip.FLASH_256KB, SaveChip.FLASH_512KB, SaveChip.FLASH_1MB,
                SaveChip.FLASH_256KB_INFRARED, SaveChip.FLASH_512KB_INFRARED,
                SaveChip.FLASH_1MB_INFRARED):
        return bytes([FLASH_CMD_PW]) + _address(pos, 3)
    raise NotImplementedResult(f"writing is not supported on chip {chip!r}")


def _write_data(transport: SpiTransport, chip: SaveChip, data: bytes, offset: int) -> int:
    page = page_size(chip)
    size = _clamp(offset, len(data), capacity(chip))

    pos = offset
    if size > 0:
        _wait_write_finish(transport, chip)
        while pos < offset + size:
            command = _write_command(chip, pos)

            page_pos = pos & ~(page - 1)
            start = pos - offset
            chunk = min(size - start, page - (pos - page_pos))

            _execute(transport, chip, bytes([CMD_WREN]))
            if chip != SaveChip.EEPROM_512B:
                while _status(transport, chip) & ~STAT_WEL & 0xFF:
                    pass

            _execute(transport, chip, command, 0, data[start:start + chunk])
            _wait_write_finish(transport, chip)

            pos = page_pos + page

    return pos - offset


def _is_data_mirrored(transport: SpiTransport, chip: SaveChip, size: int) -> bool:
    original = _read_data(transport, chip, size - 1, 1)
    old_mirror = _read_data(transport, chip, 2 * size - 1, 1)
    modified = bytes([~original[0] & 0xFF])
    _write_data(transport, chip, modified, size - 1)
    new_mirror = _read_data(transport, chip, 2 * size - 1, 1)
    _write_data(transport, chip, original, size - 1)
    return old_mirror != new_mirror


def detect_chip(transport: SpiTransport, base: SaveChip = SaveChip.EEPROM_512B) -> SaveChip:
    """Identify the save chip on a card by its JEDEC ID, status and mirroring."""
    jedec_id, status = _read_jedec_id_status(transport, base)
    masked = status & 0xFD

    if jedec_id == 0xFFFFFF and masked in (0xF0, 0x00):
        if masked == 0xF0:
            return SaveChip.EEPROM_512B
        if _is_data_mirrored(transport, SaveChip.EEPROM_8KB, 8 * 1024):
            return SaveChip.EEPROM_8KB
        if _is_data_mirrored(transport, SaveChip.EEPROM_64KB, 64 * 1024):
            return SaveChip.EEPROM_64KB
        return SaveChip.EEPROM_128KB

    infrared = base >= SaveChip.FLASH_256KB_INFRARED
    first = SaveChip.FLASH_256KB_INFRARED if infrared else SaveChip.FLASH_256KB
    step = _FLASH_JEDEC_STEPS.get(jedec_id)
    if step is not None:
        return SaveChip(first + step)
    if not infrared:
        return detect_chip(transport, SaveChip.FLASH_256KB_INFRARED)
    raise NotImplementedResult(f"unknown save chip JEDEC ID 0x{jedec_id:06X}")


class SaveCard:
    """The save chip of the inserted card, once detected."""

    def __init__(self, transport: SpiTransport) -> None:
        self._transport = transport
        self._chip = SaveChip.NONE

    @property
    def chip(self) -> SaveChip:
        return self._chip

    def init_card(self) -> SaveChip:
        """Detect the card's save chip and remember it."""
        self._chip = detect_chip(self._transport, SaveChip.EEPROM_512B)
        return self._chip

    def deinit_card(self) -> None:
        self._chip = SaveChip.NONE

    def save_size(self) -> int:
        return capacity(self._chip)

    def read_save(self, offset: int, size: int) -> bytes:
        """Read up to ``size`` bytes from ``offset``, stopping at the chip's end."""
        return _read_data(self._transport, self._chip, offset, size)

    def write_save(self, data: bytes, offset: int) -> int:
        """Write ``data`` at ``offset`` page by page; return the span of pages covered from ``offset``."""
        return _write_data(self._transport, self._chip, bytes(data), offset)
"""File system helpers: archive reference counts, paths, title destinations, filters."""

from __future__ import annotations

import contextlib
import enum
from pathlib import Path
from typing import Any, Callable, Hashable, Optional

from .stringutil import escape_file_name, truncate

FILE_NAME_MAX = 256
FILE_PATH_MAX = 512

_SDMC_PREFIX = "sdmc:"

Filter = Callable[[str, bool], bool]


class MediaType(enum.IntEnum):
    NAND = 0
    SD = 1
    GAME_CARD = 2


class ArchiveRefs:
    """Reference counts for open archives; the last release closes the archive."""

    def __init__(self, closer: Callable[[Hashable], Any]) -> None:
        self._closer = closer
        self._refs: dict[Hashable, int] = {}

    def ref(self, archive: Hashable) -> None:
        self._refs[archive] = self._refs.get(archive, 0) + 1

    def open(self, opener: Callable[..., Hashable], *args: Any) -> Hashable:
        """Open an archive with ``opener`` and take a reference to it."""
        archive = opener(*args)
        try:
            self.ref(archive)
        except BaseException:
            self._closer(archive)
            raise
        return archive

    def close(self, archive: Hashable) -> Any:
        """Drop a reference; close the archive when none remain or it was untracked."""
        count = self._refs.get(archive)
        if count is not None:
            if count > 1:
                self._refs[archive] = count - 1
                return None
            del self._refs[archive]
        return self._closer(archive)

    def refcount(self, archive: Hashable) -> int:
        return self._refs.get(archive, 0)


def _resolve(root: str | Path, path: str) -> Path:
    return Path(root) / path.lstrip("/")


def is_dir(root: str | Path, path: str) -> bool:
    """Return whether ``path`` inside the archive rooted at ``root`` is a directory."""
    return _resolve(root, path).is_dir()


def ensure_dir(root: str | Path, path: str) -> Path:
    """Make sure ``path`` is a directory, replacing a file of that name."""
    target = _resolve(root, path)
    if target.is_dir():
        return target
    with contextlib.suppress(OSError):
        target.unlink()
    target.mkdir()
    return target


def encode_utf16_path(path: str) -> bytes:
    """Encode a path as null-terminated UTF-16LE."""
    return (path + "\0").encode("utf-16-le")


_executable_path = ""


def set_3dsx_path(path: str) -> None:
    """Remember where the running executable lives, without an ``sdmc:`` prefix."""
    global _executable_path
    if path.startswith(_SDMC_PREFIX):
        path = path[len(_SDMC_PREFIX):]
    _executable_path = truncate(path, FILE_PATH_MAX)


def get_3dsx_path() -> Optional[str]:
    return _executable_path or None


def _escaped_name(name: str) -> str:
    return escape_file_name(truncate(name, FILE_NAME_MAX))


def make_3dsx_path(name: str) -> str:
    filename = _escaped_name(name)
    return f"/3ds/{filename}/{filename}.3dsx"


def make_smdh_path(name: str) -> str:
    filename = _escaped_name(name)
    return f"/3ds/{filename}/{filename}.smdh"


def get_title_destination(title_id: int) -> MediaType:
    """Return the media a title installs to, judged from its title ID."""
    platform = (title_id >> 48) & 0xFFFF
    category = (title_id >> 32) & 0xFFFF
    variation = title_id & 0xFF

    if platform == 0x0003:
        return MediaType.NAND
    if platform == 0x0004 and (
        (category & 0x8011) != 0 or (category == 0x0000 and variation == 0x02)
    ):
        return MediaType.NAND
    return MediaType.SD


def _has_suffix(name: str, suffix: str) -> bool:
    return name.lower().endswith(suffix)


def filter_cias(name: str, is_directory: bool, parent: Filter | None = None) -> bool:
    """Accept files ending in ``.cia``, after an optional parent filter."""
    if parent is not None and not parent(name, is_directory):
        return False
    if is_directory:
        return False
    return _has_suffix(name, ".cia")


def filter_tickets(name: str, is_directory: bool, parent: Filter | None = None) -> bool:
    """Accept files ending in ``.tik`` or ``.cetk``, after an optional parent filter."""
    if parent is not None and not parent(name, is_directory):
        return False
    if is_directory:
        return False
    return _has_suffix(name, ".tik") or _has_suffix(name, ".cetk")
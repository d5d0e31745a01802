"""Small string and path helpers."""

from __future__ import annotations

_RESERVED_CHARS = frozenset('<>:"/\\|?*')


def is_empty(text: str) -> bool:
    """Return True if the text is empty or holds only spaces."""
    return all(ch == " " for ch in text)


def truncate(text: str, size: int) -> str:
    """Keep what fits in a buffer of ``size`` including its terminator."""
    return text[:max(size - 1, 0)]


def file_stem(name: str, size: int) -> str:
    """Return the name up to its last dot, limited to ``size - 1`` characters."""
    dot = name.rfind(".")
    stem = name if dot == -1 else name[:dot]
    return truncate(stem, size)


def escape_file_name(name: str) -> str:
    """Replace characters not allowed in file names with underscores."""
    return "".join("_" if ch in _RESERVED_CHARS else ch for ch in name)


def path_file(path: str, size: int) -> str:
    """Return the last component of a path; a trailing slash is ignored."""
    start = -1
    end = -1
    for index, ch in enumerate(path):
        if ch == "/":
            start = end if end != -1 else 0
            end = index

    if end != len(path) - 1:
        start = end
        end = len(path)

    if end - start == 0:
        return "/"

    length = min(end - start - 1, size - 1)
    return path[start + 1:start + 1 + max(length, 0)]


def parent_path(path: str, size: int) -> str:
    """Return the parent directory of a path, ending in a slash."""
    last = len(path) - 1
    end = -1
    seen = False
    for index, ch in enumerate(path):
        if ch != "/":
            continue
        if seen and index == last:
            break
        seen = True
        end = index

    length = min(end + 1, size - 1)
    return path[:max(length, 0)]
"""Result codes, the exceptions that carry them, and the fatal-error screen layout."""

from __future__ import annotations

# Result levels.
RL_SUCCESS = 0
RL_INFO = 1
RL_STATUS = 25
RL_TEMPORARY = 26
RL_PERMANENT = 27
RL_USAGE = 28
RL_REINITIALIZE = 29
RL_RESET = 30
RL_FATAL = 31

# Result summaries.
RS_SUCCESS = 0
RS_NOP = 1
RS_WOULDBLOCK = 2
RS_OUTOFRESOURCE = 3
RS_NOTFOUND = 4
RS_INVALIDSTATE = 5
RS_NOTSUPPORTED = 6
RS_INVALIDARG = 7
RS_WRONGARG = 8
RS_CANCELED = 9
RS_STATUSCHANGED = 10
RS_INTERNAL = 11

# Result modules.
RM_APPLICATION = 254

# Result descriptions.
RD_OUT_OF_MEMORY = 0x3F3
RD_NOT_IMPLEMENTED = 0x3F4
RD_OUT_OF_RANGE = 0x3FD


def make_result(level: int, summary: int, module: int, description: int) -> int:
    """Pack the four result fields into an unsigned 32-bit result code."""
    return (
        ((level & 0x1F) << 27)
        | ((summary & 0x3F) << 21)
        | ((module & 0xFF) << 10)
        | (description & 0x3FF)
    )


APP_INVALID_ARGUMENT = make_result(RL_PERMANENT, RS_INVALIDARG, RM_APPLICATION, 1)
APP_CANCELLED = make_result(RL_PERMANENT, RS_CANCELED, RM_APPLICATION, 2)
APP_SKIPPED = make_result(RL_PERMANENT, RS_NOTSUPPORTED, RM_APPLICATION, 3)
APP_THREAD_CREATE_FAILED = make_result(RL_PERMANENT, RS_INTERNAL, RM_APPLICATION, 4)
APP_PARSE_FAILED = make_result(RL_PERMANENT, RS_INTERNAL, RM_APPLICATION, 5)
APP_BAD_DATA = make_result(RL_PERMANENT, RS_INTERNAL, RM_APPLICATION, 6)
APP_HTTP_TOO_MANY_REDIRECTS = make_result(RL_PERMANENT, RS_INTERNAL, RM_APPLICATION, 7)
APP_HTTP_ERROR_BASE = make_result(RL_PERMANENT, RS_INTERNAL, RM_APPLICATION, 8)
APP_HTTP_ERROR_END = APP_HTTP_ERROR_BASE + 600
APP_CURL_INIT_FAILED = APP_HTTP_ERROR_END
APP_CURL_ERROR_BASE = APP_CURL_INIT_FAILED + 1
APP_CURL_ERROR_END = APP_CURL_ERROR_BASE + 100
APP_NOT_IMPLEMENTED = make_result(RL_PERMANENT, RS_INTERNAL, RM_APPLICATION, RD_NOT_IMPLEMENTED)
APP_OUT_OF_MEMORY = make_result(RL_FATAL, RS_OUTOFRESOURCE, RM_APPLICATION, RD_OUT_OF_MEMORY)
APP_OUT_OF_RANGE = make_result(RL_PERMANENT, RS_INVALIDARG, RM_APPLICATION, RD_OUT_OF_RANGE)


class ResultError(Exception):
    """An operation failed with a result code."""

    code: int = 0
    default_message = "operation failed"

    def __init__(self, message: str | None = None, *, code: int | None = None) -> None:
        if code is not None:
            self.code = code
        super().__init__(message or f"{self.default_message} (0x{self.code:08X})")


class InvalidArgumentError(ResultError):
    code = APP_INVALID_ARGUMENT
    default_message = "invalid argument"


class OperationCancelled(ResultError):
    code = APP_CANCELLED
    default_message = "operation cancelled"


class SkippedError(ResultError):
    code = APP_SKIPPED
    default_message = "operation skipped"


class BadDataError(ResultError):
    code = APP_BAD_DATA
    default_message = "bad data"


class ParseFailedError(ResultError):
    code = APP_PARSE_FAILED
    default_message = "parse failed"


class OutOfRangeError(ResultError):
    code = APP_OUT_OF_RANGE
    default_message = "value out of range"


class NotImplementedResult(ResultError):
    code = APP_NOT_IMPLEMENTED
    default_message = "not implemented"


class TooManyRedirectsError(ResultError):
    code = APP_HTTP_TOO_MANY_REDIRECTS
    default_message = "too many redirects"


class HttpStatusError(ResultError):
    """An HTTP request ended with an unexpected status."""

    def __init__(self, status: int, message: str | None = None) -> None:
        self.status = status
        super().__init__(message or f"HTTP status {status}", code=APP_HTTP_ERROR_BASE + status)


PANIC_HEADER = "The application has encountered a fatal error!"
PANIC_FOOTER = "Press any button to exit."
_PANIC_MESSAGE_MAX = 1023


def _line_length(text: str, width: int) -> int:
    length = 0
    for ch in text:
        if ch == "\n":
            break
        length += 1
        if length >= width - 1:
            break
    return length


def _line_count(text: str, width: int) -> int:
    lines = 1
    length = 0
    for ch in text:
        if ch == "\n":
            lines += 1
            length = 0
        else:
            length += 1
            if length >= width - 1:
                lines += 1
                length = 0
    return lines


def _half(value: int) -> int:
    """Halve, rounding toward zero."""
    return int(value / 2)


def format_panic(message: str, width: int, height: int) -> list[str]:
    """Lay out the fatal-error screen as ``height`` rows of ``width`` characters."""
    grid = [[" "] * width for _ in range(height)]

    def put(row: int, col: int, text: str) -> None:
        if not 0 <= row < height:
            return
        for offset, ch in enumerate(text):
            column = col + offset
            if 0 <= column < width:
                grid[row][column] = ch

    put(0, 0, "-" * width)
    put(height - 1, 0, "-" * width)
    put(0, _half(width - _line_length(PANIC_HEADER, width)), PANIC_HEADER)
    put(height - 1, _half(width - _line_length(PANIC_FOOTER, width)), PANIC_FOOTER)

    text = message[:_PANIC_MESSAGE_MAX]
    row = _half(height - _line_count(text, width))
    pos = 0
    while pos < len(text):
        if text[pos] == "\n":
            row += 1
            pos += 1
            continue
        length = _line_length(text[pos:], width)
        put(row, _half(width - length), text[pos:pos + length])
        row += 1
        pos += length

    return ["".join(line) for line in grid]
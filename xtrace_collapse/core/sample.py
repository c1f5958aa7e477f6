from dataclasses import dataclass
from enum import Enum
from typing import Optional

FIELD_SEP = b"\t"

# Some trace producers prepend this byte to function names.
STRAY_NAME_PREFIX = b"\xff"


class DecodeError(ValueError):
    """A trace line that could not be turned into a sample."""

    reason = "malformed line"

    def __init__(self, line: bytes, detail: str = ""):
        self.line = line
        self.detail = detail
        super().__init__(f"{self.reason}: {detail}" if detail else self.reason)


class MissingFieldError(DecodeError):
    reason = "missing field"


class NumberFormatError(DecodeError):
    reason = "invalid number"


class EncodingError(DecodeError):
    reason = "invalid function name encoding"


class LineTooLongError(DecodeError):
    reason = "line too long"


class EventKind(Enum):
    ENTRY = "entry"
    EXIT = "exit"


@dataclass(frozen=True)
class Sample:
    kind: EventKind
    time: float
    name: Optional[str] = None
    depth: int = 0

    @property
    def is_exit(self) -> bool:
        return self.kind is EventKind.EXIT


def parse_sample(line: bytes, strip_stray_prefix: bool = True) -> Sample:
    """Decodes one tab separated function trace record.

    Fields are: depth, function number, is-exit flag, elapsed seconds and, for entries only, memory usage and function
    name. Anything after the name is ignored. The elapsed time is returned in microseconds.

    :param line: the record without its line terminator
    :param strip_stray_prefix: drop a leading STRAY_NAME_PREFIX byte from function names
    :raises DecodeError: when the record is malformed
    """
    fields = line.split(FIELD_SEP, 6)
    if len(fields) < 4:
        raise MissingFieldError(line, f"expected at least 4 fields, got {len(fields)}")

    depth = _parse_number(int, fields[0], line, "depth")
    is_exit = fields[2] != b"0"
    time = _parse_number(float, fields[3], line, "elapsed time") * 1_000_000

    if is_exit:
        return Sample(EventKind.EXIT, time, depth=depth)

    if len(fields) < 6:
        raise MissingFieldError(line, "entry record has no function name")

    return Sample(EventKind.ENTRY, time, _decode_name(fields[5], line, strip_stray_prefix), depth)


def _parse_number(kind, raw: bytes, line: bytes, what: str):
    # int() and float() also take padding and digit separators, which are not valid in a record.
    if raw != raw.strip() or b"_" in raw:
        raise NumberFormatError(line, f"{what} {raw!r}")

    try:
        return kind(raw)
    except ValueError as err:
        raise NumberFormatError(line, f"{what} {raw!r}") from err


def _decode_name(raw: bytes, line: bytes, strip_stray_prefix: bool) -> str:
    if strip_stray_prefix and raw.startswith(STRAY_NAME_PREFIX):
        raw = raw[len(STRAY_NAME_PREFIX):]

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as err:
        raise EncodingError(line, f"function name {raw!r}") from err

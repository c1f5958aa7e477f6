import logging
from enum import Enum
from typing import BinaryIO, Optional

from .config import CollapseOptions
from .frequency import FrequencyTable
from .sample import DecodeError, LineTooLongError, parse_sample
from .stack import CallStack

log = logging.getLogger(__name__)

START_MARKER = b"TRACE START"
END_PREFIX = b"\t"

_READ_CHUNK = 64 * 1024


class TraceError(Exception):
    """The input holds no trace body that could be collapsed."""


class StartMarkerNotFoundError(TraceError):
    def __init__(self):
        super().__init__(f"no line containing {START_MARKER.decode()!r} found in input")


class PrematureEndOfInputError(TraceError):
    def __init__(self, cause: OSError):
        super().__init__(f"failed reading input before the trace started: {cause}")


class ReaderState(Enum):
    SEEKING_START = "seeking-start"
    COLLECTING = "collecting"
    DONE = "done"


class TraceReader:
    def __init__(self, stream: BinaryIO, options: Optional[CollapseOptions] = None):
        self.stream = stream
        self.options = options or CollapseOptions()
        self.state = ReaderState.SEEKING_START
        self.stack = CallStack()
        self.frequencies = FrequencyTable()
        self.lines_read = 0
        self.samples = 0
        self.skipped = 0

    def collapse(self) -> FrequencyTable:
        if self.state is not ReaderState.SEEKING_START:
            raise RuntimeError(f"trace reader already used, state is {self.state.value}")

        self._seek_start()
        self.state = ReaderState.COLLECTING
        self._collect()
        self.state = ReaderState.DONE

        log.debug("Collapsed %d samples into %d stacks, skipped %d lines",
                  self.samples, len(self.frequencies), self.skipped)
        return self.frequencies

    def _seek_start(self):
        # Read in bounded chunks, keeping enough of the previous one to find a marker split between two reads.
        overlap = b""
        while True:
            try:
                chunk = self.stream.readline(_READ_CHUNK)
            except OSError as err:
                raise PrematureEndOfInputError(err) from err

            if not chunk:
                raise StartMarkerNotFoundError()

            if START_MARKER in overlap + chunk:
                self.lines_read += 1
                try:
                    self._discard_rest_of_line(chunk)
                except OSError as err:
                    raise PrematureEndOfInputError(err) from err
                return

            if chunk.endswith(b"\n"):
                self.lines_read += 1
                overlap = b""
            else:
                overlap = (overlap + chunk)[-(len(START_MARKER) - 1):]

    def _collect(self):
        while True:
            try:
                line = self._read_line()
            except LineTooLongError as err:
                self._report(err)
                continue
            except OSError as err:
                log.error("Failed reading line %d, stopping: %s", self.lines_read + 1, err)
                return

            if line is None or line.startswith(END_PREFIX):
                return

            try:
                sample = parse_sample(line, self.options.strip_stray_prefix)
            except DecodeError as err:
                self._report(err)
                continue

            self.samples += 1
            if sample.is_exit:
                completed = self.stack.pop(sample.time)
                if completed is not None:
                    self.frequencies.record(*completed)
            else:
                self.stack.push(sample.name, sample.time)

    def _read_line(self) -> Optional[bytes]:
        """Reads the next line without its terminator, None at end of input.

        Lines longer than the configured maximum are consumed up to their end and raise LineTooLongError.
        """
        limit = self.options.max_line_length
        # Room for the content plus a CRLF terminator.
        line = self.stream.readline(limit + 2)
        if not line:
            return None

        self.lines_read += 1
        if not line.endswith(b"\n") and len(line) > limit + 1:
            self._discard_rest_of_line(line)
            raise LineTooLongError(line[:80], f"longer than {limit} bytes")

        content = line.rstrip(b"\r\n")
        if len(content) > limit:
            raise LineTooLongError(content[:80], f"longer than {limit} bytes")
        return content

    def _discard_rest_of_line(self, chunk: bytes):
        """Reads and drops input up to the end of the line chunk was taken from."""
        while chunk and not chunk.endswith(b"\n"):
            chunk = self.stream.readline(_READ_CHUNK)

    def _report(self, err: DecodeError):
        self.skipped += 1
        log.warning("Skipping line %d: %s: %r", self.lines_read, err, err.line)


def collapse_trace(stream: BinaryIO, options: Optional[CollapseOptions] = None) -> FrequencyTable:
    reader = TraceReader(stream, options)
    return reader.collapse()

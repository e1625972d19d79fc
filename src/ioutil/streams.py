"""
Copy data between streams, decorate streams with buffers, and close them quietly.

Byte functions take binary file objects (RawIOBase, BufferedIOBase or anything with
the same methods); char functions take text file objects. Callers own the streams:
nothing here closes a stream except the safe_close helpers.
"""

from __future__ import annotations

import errno
import io
import logging
from contextlib import contextmanager
from typing import IO, Any, BinaryIO, Callable, Iterator, TextIO, TypeVar

from ioutil.buffered_text import BUFFER_SIZE, BufferedTextReader, BufferedTextWriter
from ioutil.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

__all__ = [
    "BUFFER_SIZE",
    "closing_quietly",
    "copy_buffered",
    "copy_bytewise",
    "copy_chars_buffered",
    "copy_chars_own_buffering",
    "copy_charwise",
    "copy_own_buffering",
    "decorate_byte_input",
    "decorate_byte_output",
    "decorate_char_input",
    "decorate_char_output",
    "safe_close",
    "safe_close_byte_input",
    "safe_close_byte_output",
    "safe_close_char_input",
    "safe_close_char_output",
]

S = TypeVar("S")


# --- safe close ---


def safe_close(resource: Any) -> None:
    """Close resource if it is not None. Any error raised by close() is discarded."""
    if resource is None:
        return
    try:
        resource.close()
    except Exception:
        pass


def safe_close_byte_input(stream: BinaryIO | None) -> None:
    safe_close(stream)


def safe_close_byte_output(stream: BinaryIO | None) -> None:
    safe_close(stream)


def safe_close_char_input(reader: TextIO | None) -> None:
    safe_close(reader)


def safe_close_char_output(writer: TextIO | None) -> None:
    safe_close(writer)


@contextmanager
def closing_quietly(resource: S) -> Iterator[S]:
    """Yield resource and safe-close it on exit, so a failing close never hides an error from the block."""
    try:
        yield resource
    finally:
        safe_close(resource)


# --- buffering decorators ---

_BUFFERED_BYTE_INPUT = (io.BufferedReader, io.BufferedRandom)
_BUFFERED_BYTE_OUTPUT = (io.BufferedWriter, io.BufferedRandom)


def decorate_byte_input(stream: BinaryIO) -> BinaryIO:
    """Wrap stream in io.BufferedReader unless it already is one."""
    if stream is None:
        raise InvalidArgumentError("parameter 'stream' must not be None")
    if isinstance(stream, _BUFFERED_BYTE_INPUT):
        return stream
    return io.BufferedReader(stream, BUFFER_SIZE)


def decorate_byte_output(stream: BinaryIO) -> BinaryIO:
    """Wrap stream in io.BufferedWriter unless it already is one."""
    if stream is None:
        raise InvalidArgumentError("parameter 'stream' must not be None")
    if isinstance(stream, _BUFFERED_BYTE_OUTPUT):
        return stream
    return io.BufferedWriter(stream, BUFFER_SIZE)


def decorate_char_input(reader: TextIO) -> TextIO:
    """Wrap reader in BufferedTextReader unless it already is one."""
    if reader is None:
        raise InvalidArgumentError("parameter 'reader' must not be None")
    if isinstance(reader, BufferedTextReader):
        return reader
    return BufferedTextReader(reader, BUFFER_SIZE)


def decorate_char_output(writer: TextIO) -> TextIO:
    """Wrap writer in BufferedTextWriter unless it already is one."""
    if writer is None:
        raise InvalidArgumentError("parameter 'writer' must not be None")
    if isinstance(writer, BufferedTextWriter):
        return writer
    return BufferedTextWriter(writer, BUFFER_SIZE)


class _BorrowedBinary(io.RawIOBase):
    """Raw view of a caller's binary stream. Closing the view leaves the stream open."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def readable(self) -> bool:
        return self._stream.readable()

    def writable(self) -> bool:
        return self._stream.writable()

    def readinto(self, b) -> int | None:
        return self._stream.readinto(b)

    def write(self, b) -> int | None:
        return self._stream.write(b)


class _BorrowedText(io.TextIOBase):
    """Text view of a caller's text stream. Closing the view leaves the stream open."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def readable(self) -> bool:
        return self._stream.readable()

    def writable(self) -> bool:
        return self._stream.writable()

    def read(self, size: int | None = -1) -> str:
        return self._stream.read(size)

    def write(self, s: str) -> int:
        return self._stream.write(s)


@contextmanager
def _decorated(
    stream: S,
    decorate: Callable[[S], S],
    buffered_types: tuple[type, ...],
    borrow: Callable[[S], S],
) -> Iterator[S]:
    """
    Decorate stream for the duration of the block.

    A stream that is already buffered is used as is. Otherwise the decorator wraps a
    borrowed view of the stream, so closing the decorator (here, or later by garbage
    collection after a failed flush) never closes the caller's stream. On the error
    path a failing close is discarded and the original error propagates.
    """
    if isinstance(stream, buffered_types):
        yield stream
        return
    wrapper = decorate(borrow(stream))
    try:
        yield wrapper
    except BaseException:
        safe_close(wrapper)
        raise
    wrapper.close()


# --- byte copy ---


def copy_bytewise(source: BinaryIO, sink: BinaryIO) -> None:
    """Copy one byte at a time until end of input, then flush sink."""
    count = 0
    while True:
        unit = source.read(1)
        if not unit:
            break
        sink.write(unit)
        count += 1
    sink.flush()
    logger.debug("bytewise copy: %d bytes", count)


def copy_buffered(source: BinaryIO, sink: BinaryIO) -> None:
    """Decorate both streams with buffers, then copy bytewise through the decorators."""
    with _decorated(
        source, decorate_byte_input, _BUFFERED_BYTE_INPUT, _BorrowedBinary
    ) as buffered_in, _decorated(
        sink, decorate_byte_output, _BUFFERED_BYTE_OUTPUT, _BorrowedBinary
    ) as buffered_out:
        copy_bytewise(buffered_in, buffered_out)
    sink.flush()


def _write_all(sink: IO[bytes], block: memoryview) -> None:
    """
    Write block completely; raw sinks may accept fewer bytes than offered.

    Non-blocking sinks are not supported: a sink that accepts nothing raises
    BlockingIOError instead of dropping the rest of the block.
    """
    while block:
        written = sink.write(block)
        if not written:
            raise BlockingIOError(errno.EAGAIN, "sink accepted no data; non-blocking sinks are not supported")
        if written >= len(block):
            return
        block = block[written:]


def copy_own_buffering(source: BinaryIO, sink: BinaryIO) -> None:
    """Copy through one reusable block of BUFFER_SIZE bytes, then flush sink."""
    total = 0
    buffer = bytearray(BUFFER_SIZE)
    with memoryview(buffer) as view:
        while True:
            length = source.readinto(view)
            if not length:
                break
            _write_all(sink, view[:length])
            total += length
    sink.flush()
    logger.debug("own-buffered copy: %d bytes", total)


# --- char copy ---


def copy_charwise(reader: TextIO, writer: TextIO) -> None:
    """Copy one character at a time until end of input, then flush writer."""
    count = 0
    while True:
        unit = reader.read(1)
        if not unit:
            break
        writer.write(unit)
        count += 1
    writer.flush()
    logger.debug("charwise copy: %d chars", count)


def copy_chars_buffered(reader: TextIO, writer: TextIO) -> None:
    """Decorate both streams with buffers, then copy charwise through the decorators."""
    with _decorated(
        reader, decorate_char_input, (BufferedTextReader,), _BorrowedText
    ) as buffered_in, _decorated(
        writer, decorate_char_output, (BufferedTextWriter,), _BorrowedText
    ) as buffered_out:
        copy_charwise(buffered_in, buffered_out)
    writer.flush()


def copy_chars_own_buffering(reader: TextIO, writer: TextIO) -> None:
    """Copy in blocks of up to BUFFER_SIZE characters, then flush writer."""
    total = 0
    while True:
        block = reader.read(BUFFER_SIZE)
        if not block:
            break
        writer.write(block)
        total += len(block)
    writer.flush()
    logger.debug("own-buffered copy: %d chars", total)

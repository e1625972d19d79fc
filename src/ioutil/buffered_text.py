"""Buffering decorators for text streams (the stdlib only buffers binary streams)."""

from __future__ import annotations

import io
from typing import TextIO

BUFFER_SIZE = 8192


class _TextDecorator(io.TextIOBase):
    """Shared detach/close handling for a decorator around another text stream."""

    def __init__(self, stream: TextIO, buffer_size: int = BUFFER_SIZE) -> None:
        self._stream: TextIO | None = None
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self._stream = stream
        self._buffer_size = buffer_size

    @property
    def buffer_size(self) -> int:
        return self._buffer_size

    def _wrapped(self) -> TextIO:
        if self.closed:
            raise ValueError("I/O operation on closed stream")
        if self._stream is None:
            raise ValueError("underlying stream has been detached")
        return self._stream

    def detach(self) -> TextIO:
        """Separate from the wrapped stream and return it without closing it."""
        stream = self._wrapped()
        self.flush()
        self._stream = None
        return stream

    def flush(self) -> None:
        pass

    def close(self) -> None:
        """
        Flush, then close the wrapped stream, even when the flush fails.

        A detached decorator closes nothing else.
        """
        if self.closed:
            return
        stream = self._stream
        try:
            self.flush()
        finally:
            self._stream = None
            super().close()
            if stream is not None:
                stream.close()


class BufferedTextReader(_TextDecorator):
    """Reads the wrapped stream in blocks of buffer_size characters and serves reads from memory."""

    def __init__(self, stream: TextIO, buffer_size: int = BUFFER_SIZE) -> None:
        super().__init__(stream, buffer_size)
        self._pending = ""
        self._pos = 0

    def readable(self) -> bool:
        return True

    def _fill(self) -> bool:
        """Load the next block; False at end of input."""
        chunk = self._wrapped().read(self._buffer_size)
        if not chunk:
            return False
        self._pending = chunk
        self._pos = 0
        return True

    def _exhausted(self) -> bool:
        return self._pos >= len(self._pending)

    def read(self, size: int | None = -1) -> str:
        stream = self._wrapped()
        if size is None or size < 0:
            parts = [self._pending[self._pos:]]
            self._pending, self._pos = "", 0
            parts.append(stream.read())
            return "".join(parts)
        parts: list[str] = []
        while size > 0:
            if self._exhausted() and not self._fill():
                break
            chunk = self._pending[self._pos:self._pos + size]
            self._pos += len(chunk)
            size -= len(chunk)
            parts.append(chunk)
        return "".join(parts)

    def readline(self, size: int | None = -1) -> str:
        self._wrapped()
        remaining = size if size is not None and size >= 0 else None
        parts: list[str] = []
        while remaining != 0:
            if self._exhausted() and not self._fill():
                break
            end = len(self._pending)
            newline = self._pending.find("\n", self._pos)
            if newline >= 0:
                end = newline + 1
            if remaining is not None:
                end = min(end, self._pos + remaining)
                remaining -= end - self._pos
            chunk = self._pending[self._pos:end]
            self._pos = end
            parts.append(chunk)
            if chunk.endswith("\n"):
                break
        return "".join(parts)


class BufferedTextWriter(_TextDecorator):
    """Collects small writes and forwards them in blocks of at most buffer_size characters."""

    def __init__(self, stream: TextIO, buffer_size: int = BUFFER_SIZE) -> None:
        super().__init__(stream, buffer_size)
        self._pending: list[str] = []
        self._pending_size = 0

    def writable(self) -> bool:
        return True

    def write(self, s: str) -> int:
        self._wrapped()
        if not isinstance(s, str):
            raise TypeError(f"write() argument must be str, not {type(s).__name__}")
        self._pending.append(s)
        self._pending_size += len(s)
        if self._pending_size >= self._buffer_size:
            self._write_pending()
        return len(s)

    def _write_pending(self) -> None:
        stream = self._wrapped()
        data = "".join(self._pending)
        for start in range(0, len(data), self._buffer_size):
            stream.write(data[start:start + self._buffer_size])
        self._pending.clear()
        self._pending_size = 0

    def flush(self) -> None:
        """Forward pending text and flush the wrapped stream. No-op once detached."""
        if self._stream is None or self.closed:
            return
        if self._pending:
            self._write_pending()
        self._stream.flush()

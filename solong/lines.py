"""Line-by-line reading of a stream in fixed-size chunks."""

from __future__ import annotations

from typing import IO, AnyStr, Generic, Iterator, Optional

DEFAULT_BUFFER_SIZE = 10


class LineReader(Generic[AnyStr]):
    """Read lines, newline included, from a text or binary stream.

    Data beyond the returned line is kept for the next call, so a reader
    must be the only consumer of its stream.
    """

    def __init__(self, stream: IO[AnyStr], buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self._stream = stream
        self._buffer_size = buffer_size
        self._pending: Optional[AnyStr] = None

    def _split_pending(self) -> Optional[AnyStr]:
        """Remove and return the first complete line held back, if any."""
        pending = self._pending
        if not pending:
            return None
        index = pending.find(b"\n" if isinstance(pending, bytes) else "\n")  # type: ignore[arg-type]
        if index < 0:
            return None
        self._pending = pending[index + 1 :]
        return pending[: index + 1]

    def readline(self) -> Optional[AnyStr]:
        """Return the next line, or None once the stream has no more data."""
        while True:
            line = self._split_pending()
            if line is not None:
                return line
            chunk = self._stream.read(self._buffer_size)
            if not chunk:
                break
            self._pending = chunk if self._pending is None else self._pending + chunk
        rest = self._pending
        self._pending = None
        return rest if rest else None

    def __iter__(self) -> Iterator[AnyStr]:
        while (line := self.readline()) is not None:
            yield line
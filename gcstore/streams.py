"""Byte streams used for uploading and downloading object data."""

from __future__ import annotations

from typing import BinaryIO, Iterable, Iterator, Optional, Tuple

BUFFER_CAPACITY = 8 * 1024


def iter_chunks(reader: BinaryIO, chunk_size: int = BUFFER_CAPACITY) -> Iterator[bytes]:
    """Yield successive chunks of at most ``chunk_size`` bytes read from ``reader``.

    The iteration ends when the reader reports end of file. Errors raised by the
    reader propagate to the caller.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, but was {chunk_size}")
    while True:
        chunk = reader.read(chunk_size)
        if not chunk:
            return
        yield bytes(chunk)


class SizedByteStream:
    """An iterator over the bytes of a download that knows its expected length."""

    def __init__(self, data: Iterable[int], size: Optional[int] = None) -> None:
        if size is not None and size < 0:
            raise ValueError(f"size may not be negative, but was {size}")
        self._data = iter(data)
        self._size = size

    def __iter__(self) -> "SizedByteStream":
        return self

    def __next__(self) -> int:
        return next(self._data)

    def size_hint(self) -> Tuple[int, Optional[int]]:
        """Lower and upper bounds on the number of bytes the stream yields."""
        return (self._size if self._size is not None else 0, self._size)
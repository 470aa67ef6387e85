from tcpdemo.core.models.errors import TruncatedInput


class BufferWriter:
    """
    In-memory ByteSink. Codecs encode a whole message into one of these
    before handing the result to the real sink in a single write.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    def write(self, data: bytes) -> int:
        self._buffer.extend(data)
        return len(data)

    def getvalue(self) -> bytes:
        return bytes(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)


class BufferReader:
    """
    In-memory ByteSource over a bytes-like object.

    Reads never go past the end of the data: a request for more bytes
    than remain raises TruncatedInput and leaves the position untouched.
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = memoryview(data)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def read_exact(self, n: int) -> bytes:
        if n < 0:
            raise ValueError(f"Cannot read a negative number of bytes: {n}")

        available = self.remaining
        if available < n:
            raise TruncatedInput(expected=n, received=available)

        chunk = bytes(self._data[self._pos:self._pos + n])
        self._pos += n
        return chunk

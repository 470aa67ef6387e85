class ProtocolError(Exception):
    """
    Base class for every failure raised while encoding, decoding or
    exchanging messages.

    Decode errors are fatal for the message being decoded: the bytes that
    follow cannot be trusted, so callers discard the message (and usually
    the connection) rather than retrying the same parse.
    """


class TruncatedInput(ProtocolError):
    """The stream ended before a field or message was complete."""

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(
            f"Truncated input: expected {expected} byte(s), got {received}"
        )
        self.expected = expected
        self.received = received


class InvalidEncoding(ProtocolError):
    """A string field does not hold valid UTF-8."""


class UnknownRequestType(ProtocolError):
    def __init__(self, tag: int) -> None:
        super().__init__(f"Unknown request type: {tag}")
        self.tag = tag


class UnknownResponseType(ProtocolError):
    def __init__(self, tag: int) -> None:
        super().__init__(f"Unknown response type: {tag}")
        self.tag = tag


class FieldTooLarge(ProtocolError):
    """
    Raised before anything is written when a string does not fit in the
    16-bit length prefix. This is a caller error, not a wire condition.
    """

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Field too large: {size} byte(s), limit is {limit}")
        self.size = size
        self.limit = limit


class InvalidFieldLength(ProtocolError):
    """A fixed-width field declared a length other than its width."""

    def __init__(self, expected: int, declared: int) -> None:
        super().__init__(
            f"Invalid field length: expected {expected}, declared {declared}"
        )
        self.expected = expected
        self.declared = declared


class TrailingBytes(ProtocolError):
    def __init__(self, count: int) -> None:
        super().__init__(f"{count} unexpected byte(s) after message")
        self.count = count


class BufferOverflow(ProtocolError):
    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Receive buffer overflow: {size} byte(s), limit is {limit}")
        self.size = size
        self.limit = limit


class ShortWrite(ProtocolError):
    """The sink accepted fewer bytes than it was given."""

    def __init__(self, expected: int, accepted: int) -> None:
        super().__init__(
            f"Short write: sink accepted {accepted} of {expected} byte(s)"
        )
        self.expected = expected
        self.accepted = accepted


class ConnectionClosed(ProtocolError):
    """
    Clean end of stream at a message boundary.

    This is the normal termination signal of a session, distinct from
    TruncatedInput which means the peer stopped in the middle of a message.
    """

    def __init__(self) -> None:
        super().__init__("Connection closed by peer")

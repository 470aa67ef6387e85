def jumble(message: str, amount: int) -> str:
    """
    Rotate the characters of `message` left by `amount` positions.

    Characters are Unicode code points, so multi-byte UTF-8 sequences are
    moved as a whole. The rotation wraps: `amount` is taken modulo the
    length of the message, and the empty string is returned unchanged.

    >>> jumble("abcdef", 2)
    'cdefab'
    """
    if amount < 0:
        raise ValueError(f"amount must not be negative: {amount}")
    if not message:
        return message

    shift = amount % len(message)
    return message[shift:] + message[:shift]

from app.errors import InvalidText


def validate_text(text) -> str:
    """Return ``text`` as a well-formed ``str`` or raise :class:`InvalidText`.

    Bytes are decoded as UTF-8. Strings are rejected when they carry lone
    surrogates, which cannot be encoded and would split a character in two.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            return bytes(text).decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidText(f"invalid UTF-8 input: {e.reason}") from e
    if not isinstance(text, str):
        raise InvalidText(f"expected text, got {type(text).__name__}")
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidText(f"malformed text at index {e.start}") from e
    return text

from __future__ import annotations

# Backslash must come first so the escapes added later are not doubled.
_TEXT_SPECIALS = ("\\", "#", "$", "@", "<", ">")
_CONTENT_SPECIALS = ("\\", "#", "$", "[", "]")
_STRING_SPECIALS = ("\\", '"')


def _escape(text: str, specials: tuple[str, ...]) -> str:
    for char in specials:
        text = text.replace(char, "\\" + char)
    return text


def escape_text(text: str) -> str:
    """Escape text placed directly in Typst markup."""
    return _escape(text, _TEXT_SPECIALS)


def escape_content(text: str) -> str:
    """Escape text placed inside a ``[...]`` content block of a styled call."""
    return _escape(text, _CONTENT_SPECIALS)


def escape_string(text: str) -> str:
    """Escape text placed inside a Typst ``"..."`` string literal."""
    return _escape(text, _STRING_SPECIALS)

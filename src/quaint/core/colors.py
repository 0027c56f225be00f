"""Hex color parsing for placeholder foreground and background colors.

Colors arrive as query parameters in the short (``abc``) or long
(``aabbcc``) hex form, each optionally prefixed with ``#``.  Resolution is a
two step process:

1. :func:`normalize_hex` strips the prefix, checks the length and expands
   the short form to six digits.
2. :func:`resolve_color` parses the six digits into an :class:`RGBColor`
   with a fully opaque alpha channel.

Usage
-----
::

    from quaint.core.colors import resolve_color

    fg = resolve_color(request_value, "#969696")
    fg.as_tuple()   # (150, 150, 150, 255)
    fg.hex          # '#969696'

Nothing here logs; callers decide how a :class:`BadColorError` is reported.
"""

from __future__ import annotations

import string
from dataclasses import dataclass

from quaint.core.errors import BadColorError

_HEX_DIGITS = frozenset(string.hexdigits)


@dataclass(frozen=True)
class RGBColor:
    """An opaque RGB color.

    Attributes:
        r: Red channel (0-255).
        g: Green channel (0-255).
        b: Blue channel (0-255).
        a: Alpha channel, always 255 for parsed colors.
    """

    r: int
    g: int
    b: int
    a: int = 255

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return the color as an ``(r, g, b, a)`` tuple for Pillow."""
        return (self.r, self.g, self.b, self.a)

    @property
    def hex(self) -> str:
        """The color as a lower-case ``#rrggbb`` string."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


def normalize_hex(value: str) -> str | None:
    """Normalize a hex color spec to exactly six lower-case hex digits.

    Args:
        value: Color spec such as ``"#abc"``, ``"abc"`` or ``"aabbcc"``.

    Returns:
        The six digit form, or ``None`` if the length (after stripping a
        single leading ``#``) is neither 3 nor 6.  Digit validity is not
        checked here; see :func:`hex_to_rgb`.
    """
    if value.startswith("#"):
        value = value[1:]
    if len(value) not in (3, 6):
        return None
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    return value.lower()


def hex_to_rgb(digits: str) -> RGBColor:
    """Parse six hex digits as a 24-bit value and split it into channels.

    Raises:
        BadColorError: If *digits* contains anything but hex digits.
    """
    # int(..., 16) also accepts signs, "0x", underscores and whitespace.
    if not digits or not _HEX_DIGITS.issuperset(digits):
        raise BadColorError(digits, "invalid hex digits")
    rgb = int(digits, 16)
    return RGBColor(r=(rgb >> 16) & 0xFF, g=(rgb >> 8) & 0xFF, b=rgb & 0xFF)


def resolve_color(param: str | None, fallback: str) -> RGBColor:
    """Resolve a color query parameter, falling back to a default.

    Args:
        param: Raw value from the request.  Empty or ``None`` selects
            *fallback*.
        fallback: Default color spec in the same hex format.

    Returns:
        The parsed color.

    Raises:
        BadColorError: If the chosen spec has the wrong length or contains
            non-hex characters.  ``BadColorError.value`` is the raw spec.
    """
    spec = param if param else fallback

    digits = normalize_hex(spec)
    if digits is None:
        raise BadColorError(spec)

    try:
        return hex_to_rgb(digits)
    except BadColorError as e:
        raise BadColorError(spec, "invalid hex digits") from e

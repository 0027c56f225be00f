"""Width/height parsing and bounds checking for placeholder requests."""

from __future__ import annotations

import logging
import re
from typing import NamedTuple

from quaint.core.errors import TooLargeError

logger = logging.getLogger(__name__)

MAX_SIZE = 4000
DEFAULT_SIZE = 512

# ASCII digits only: no whitespace, underscores or other Unicode digits.
_SIZE_RE = re.compile(r"[+-]?[0-9]+")


class Dimensions(NamedTuple):
    """Validated canvas size.  A zero side is resolved by the generator."""

    width: int
    height: int


def parse_size(raw: str | None) -> int:
    """Parse a base-10 size parameter.

    Absent, malformed and negative values all become ``0``; a malformed
    value is indistinguishable from a missing one.
    """
    if raw is None:
        return 0
    if not _SIZE_RE.fullmatch(raw):
        logger.debug("Ignoring unparsable size value %r", raw)
        return 0
    return max(int(raw, 10), 0)


def resolve_dimensions(
    raw_width: str | None,
    raw_height: str | None,
    *,
    max_size: int = MAX_SIZE,
    default_size: int = DEFAULT_SIZE,
) -> Dimensions:
    """Resolve requested width and height into bounded dimensions.

    Args:
        raw_width: ``width`` query parameter, or ``None``.
        raw_height: ``height`` query parameter, or ``None``.
        max_size: Largest accepted value for either side.
        default_size: Width used when neither side was requested.  The
            height is left at ``0`` in that case.

    Returns:
        The validated :class:`Dimensions`.

    Raises:
        TooLargeError: If either side exceeds *max_size*.
    """
    width = parse_size(raw_width)
    height = parse_size(raw_height)

    if width == 0 and height == 0:
        width = default_size

    if width > max_size or height > max_size:
        raise TooLargeError(width, height, max_size)

    return Dimensions(width, height)

"""Exception types raised by the placeholder rendering pipeline.

Core modules raise these; only :mod:`quaint.api.main` translates them into
HTTP status codes.
"""

from __future__ import annotations

from pathlib import Path


class QuaintError(Exception):
    """Base class for all placeholder pipeline errors."""


class BadColorError(QuaintError, ValueError):
    """A color parameter is not a valid 3- or 6-digit hex code.

    Attributes:
        value: The offending color string as supplied by the client.
    """

    def __init__(self, value: str, reason: str = "bad hex color format") -> None:
        super().__init__(f"{reason}: {value!r}")
        self.value = value


class TooLargeError(QuaintError, ValueError):
    """Requested width or height exceeds the configured maximum."""

    def __init__(self, width: int, height: int, max_size: int) -> None:
        super().__init__(f"requested image too large: {width}x{height} (max {max_size})")
        self.width = width
        self.height = height
        self.max_size = max_size


class BackgroundDecodeError(QuaintError):
    """The background file exists but is not a decodable raster image."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"could not decode background image {path}: {reason}")
        self.path = path


class GeneratorConstructionError(QuaintError):
    """The image generator could not be built (e.g. unreadable font)."""

    def __init__(self, font_path: Path | None, reason: str) -> None:
        super().__init__(f"could not create generator with font {font_path}: {reason}")
        self.font_path = font_path


class RenderError(QuaintError):
    """Rasterising the placeholder text failed."""

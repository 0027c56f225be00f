"""Placeholder image rasterisation built on Pillow.

:class:`ImageGenerator` is the narrow rendering interface the HTTP layer
talks to.  It is configured once per request from :class:`GeneratorOptions`
and exposes a single operation, :meth:`ImageGenerator.render`, which draws
a line of text centered on a solid (or image) background.

Sizing rules
------------
- Both sides zero is an error; a single zero side produces a square canvas.
- The text is drawn at the largest font size whose bounding box fits inside
  the canvas minus the margins.
- ``margin_ratio < 0`` disables the margin.  Otherwise each side loses
  ``margin_ratio`` of the canvas extent (``0.2`` by default).

Fonts
-----
The TrueType file is read once at construction so that an unreadable asset
fails early with :class:`~quaint.core.errors.GeneratorConstructionError`.
With ``font_path=None`` Pillow's bundled scalable default font is used.

Usage
-----
::

    options = GeneratorOptions(font_path=path, foreground=fg, background=bg)
    image = ImageGenerator(options).render("hello", 512, 0)
    png = encode_png(image)
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont, ImageOps

from quaint.core.colors import RGBColor
from quaint.core.errors import GeneratorConstructionError, RenderError

logger = logging.getLogger(__name__)

DEFAULT_MARGIN_RATIO = 0.2
NO_MARGIN = -1.0


@dataclass
class GeneratorOptions:
    """Everything needed to construct an :class:`ImageGenerator`.

    Attributes:
        font_path: TrueType font file, or ``None`` for Pillow's default font.
        foreground: Text color.
        background: Canvas fill color.
        margin_ratio: Fraction of each side kept free of text.  Negative
            values mean no margin.
        background_image: Optional bitmap scaled to cover the canvas.
    """

    font_path: Path | None
    foreground: RGBColor
    background: RGBColor
    margin_ratio: float = DEFAULT_MARGIN_RATIO
    background_image: Image.Image | None = None


class ImageGenerator:
    """Renders placeholder text onto a canvas."""

    def __init__(self, options: GeneratorOptions) -> None:
        """Build a generator and load its font.

        Raises:
            GeneratorConstructionError: If the font file cannot be read or
                is not a usable TrueType/OpenType font.
        """
        self._options = options
        self._font_data: bytes | None = None

        if options.font_path is not None:
            font_path = Path(options.font_path)
            try:
                self._font_data = font_path.read_bytes()
                # Parse once up front so a corrupt file fails here, not mid-render.
                ImageFont.truetype(io.BytesIO(self._font_data), 12)
            except OSError as e:
                raise GeneratorConstructionError(font_path, str(e)) from e

    @property
    def options(self) -> GeneratorOptions:
        return self._options

    # -- Public interface ---------------------------------------------------

    def render(self, text: str, width: int, height: int) -> Image.Image:
        """Render *text* onto a ``width`` x ``height`` RGB canvas.

        Args:
            text: Text to draw.  An empty string yields a plain canvas.
            width: Canvas width in pixels; ``0`` copies *height*.
            height: Canvas height in pixels; ``0`` copies *width*.

        Returns:
            The rendered canvas.

        Raises:
            RenderError: For negative or all-zero dimensions, or if Pillow
                fails while drawing.
        """
        if width < 0 or height < 0:
            raise RenderError(f"negative dimensions not allowed: {width}x{height}")
        if width == 0 and height == 0:
            raise RenderError("either width or height needs to be greater than zero")
        if width == 0:
            width = height
        elif height == 0:
            height = width

        try:
            canvas = self._make_canvas(width, height)
            if text:
                self._draw_text(canvas, text)
        except (OSError, ValueError, MemoryError) as e:
            raise RenderError(f"failed to render {width}x{height} placeholder: {e}") from e

        return canvas.convert("RGB")

    # -- Internals ----------------------------------------------------------

    def _make_canvas(self, width: int, height: int) -> Image.Image:
        canvas = Image.new("RGBA", (width, height), self._options.background.as_tuple())
        backdrop = self._options.background_image
        if backdrop is not None:
            # Scale to cover, then center-crop to the canvas size.
            cover = ImageOps.fit(backdrop.convert("RGBA"), (width, height))
            canvas.alpha_composite(cover)
        return canvas

    def _font(self, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        if self._font_data is not None:
            return ImageFont.truetype(io.BytesIO(self._font_data), size)
        return ImageFont.load_default(size=size)

    def _fit_font(self, draw: ImageDraw.ImageDraw, text: str, max_w: int, max_h: int):
        """Binary search for the largest font whose text box fits."""
        lo, hi = 1, max(max_h, 1) * 2
        best = self._font(lo)
        while lo <= hi:
            mid = (lo + hi) // 2
            font = self._font(mid)
            left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
            if right - left <= max_w and bottom - top <= max_h:
                best = font
                lo = mid + 1
            else:
                hi = mid - 1
        return best

    def _draw_text(self, canvas: Image.Image, text: str) -> None:
        width, height = canvas.size
        ratio = self._options.margin_ratio
        if ratio < 0:
            margin_x = margin_y = 0
        else:
            margin_x = int(width * ratio)
            margin_y = int(height * ratio)

        max_w = width - 2 * margin_x
        max_h = height - 2 * margin_y
        if max_w <= 0 or max_h <= 0:
            logger.debug("No room for text on %dx%d canvas (margin %.2f).", width, height, ratio)
            return

        draw = ImageDraw.Draw(canvas)
        font = self._fit_font(draw, text, max_w, max_h)
        left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
        x = (width - (right - left)) / 2 - left
        y = (height - (bottom - top)) / 2 - top
        draw.text((x, y), text, fill=self._options.foreground.as_tuple(), font=font)


def encode_png(image: Image.Image) -> bytes:
    """Serialise *image* as PNG bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()

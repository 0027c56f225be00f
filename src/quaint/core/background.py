"""Optional background bitmap loading.

The background image is a deployment asset: when it is missing the service
simply renders on a flat background color.  A file that is present but
cannot be decoded is treated as a server-side problem and reported with
:class:`~quaint.core.errors.BackgroundDecodeError`.
"""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from quaint.core.errors import BackgroundDecodeError

logger = logging.getLogger(__name__)


def load_background(path: Path | str | None) -> Image.Image | None:
    """Load and fully decode the background image at *path*.

    The file handle is closed before this function returns, whether the
    decode succeeded or not.  The returned image has its pixel data loaded
    into memory and no longer references the file.

    Args:
        path: Location of the background asset.  ``None`` disables the
            background entirely.

    Returns:
        The decoded image, or ``None`` if no background is configured or the
        file cannot be opened (missing, permission denied, a directory...).

    Raises:
        BackgroundDecodeError: If the file opens but is not a readable
            raster image (unknown format, truncated data, decompression
            bomb).
    """
    if path is None:
        return None

    path = Path(path)
    try:
        fh = open(path, "rb")
    except OSError as e:
        logger.info("No background image at %s (%s); using flat background.", path, e)
        return None

    with fh:
        try:
            image = Image.open(fh)
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as e:
            raise BackgroundDecodeError(path, str(e)) from e

    logger.debug("Loaded background image %s (%s, %dx%d).", path, image.format, *image.size)
    return image

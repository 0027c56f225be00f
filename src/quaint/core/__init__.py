"""Core placeholder pipeline: validation, color resolution and rendering.

- **colors**: hex color normalization and parsing
- **dimensions**: width/height parsing and bounds
- **background**: optional background bitmap loading
- **generator**: Pillow-based placeholder rasterisation
- **config**: Pydantic Settings configuration
- **errors**: exception taxonomy
"""

from quaint.core.colors import RGBColor, resolve_color
from quaint.core.config import QuaintConfig, config
from quaint.core.dimensions import Dimensions, resolve_dimensions
from quaint.core.errors import (
    BackgroundDecodeError,
    BadColorError,
    GeneratorConstructionError,
    QuaintError,
    RenderError,
    TooLargeError,
)
from quaint.core.generator import GeneratorOptions, ImageGenerator

__all__ = [
    "BackgroundDecodeError",
    "BadColorError",
    "Dimensions",
    "GeneratorConstructionError",
    "GeneratorOptions",
    "ImageGenerator",
    "QuaintConfig",
    "QuaintError",
    "RGBColor",
    "RenderError",
    "TooLargeError",
    "config",
    "resolve_color",
    "resolve_dimensions",
]

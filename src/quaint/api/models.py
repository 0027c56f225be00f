"""Pydantic models for the placeholder API.

Models
------
RenderRequest
    The fully resolved, request-scoped description of one placeholder
    image.  Built by the route handler after validation and handed
    straight to the generator; never persisted.
HealthResponse
    Body of ``GET /healthz``.
"""

from __future__ import annotations

from typing import Any

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field

from quaint.core.colors import RGBColor


class RenderRequest(BaseModel):
    """Validated inputs for a single placeholder render.

    Attributes:
        text: Text taken from the request path.
        width: Canvas width in pixels (``0`` means "same as height").
        height: Canvas height in pixels (``0`` means "same as width").
        foreground: Resolved text color.
        background: Resolved canvas color.
        background_image: Optional decoded background bitmap.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    text: str
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    foreground: RGBColor
    background: RGBColor
    background_image: Image.Image | None = None

    def log_fields(self) -> dict[str, Any]:
        """Fields attached to the per-request log record."""
        return {
            "width": self.width,
            "height": self.height,
            "foreground": self.foreground.hex,
            "background": self.background.hex,
            "text": self.text,
        }


class HealthResponse(BaseModel):
    """Response body for ``GET /healthz``."""

    status: str = Field(default="ok", description="Always 'ok' while the process serves requests.")
    version: str = Field(..., description="Installed quaint version.")

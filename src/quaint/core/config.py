"""Configuration management for the Quaint placeholder service.

Settings are managed with Pydantic Settings.  Every field can be overridden
with an environment variable carrying the ``QUAINT_`` prefix, or from a
``.env`` file in the working directory.

Loading priority:
1. Environment variables (``QUAINT_*``)
2. ``.env`` file
3. Defaults defined on :class:`QuaintConfig`

Example .env file::

    QUAINT_MAX_SIZE=2000
    QUAINT_FONT_PATH=/usr/share/fonts/TTF/DejaVuSans-Bold.ttf
    QUAINT_BACKGROUND_IMAGE=/srv/quaint/bg.jpg
    QUAINT_SERVER_PORT=8080

Global Configuration Instance
-----------------------------
A module level ``config`` instance is created at import time.  The web
application receives its configuration explicitly through
:func:`quaint.api.main.create_app`; the global instance is only the default
used by the CLI entry point.  Configuration is never reloaded while the
process runs.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from quaint.core.colors import resolve_color
from quaint.core.errors import BadColorError
from quaint.core.generator import NO_MARGIN


class QuaintConfig(BaseSettings):
    """Process-wide settings for the placeholder service.

    Attributes
    ----------
    Limits:
        max_size : int
            Largest accepted width or height (413 above this).
        default_size : int
            Width used when a request specifies neither side.

    Assets:
        background_image : Path | None
            Optional background bitmap.  Missing files are ignored.
        font_path : Path | None
            TrueType font used to draw the text.  ``None`` selects Pillow's
            bundled default font.

    Rendering:
        default_fg : str
            Foreground hex color used when ``fg`` is not given.
        default_bg : str
            Background hex color used when ``bg`` is not given.
        margin_ratio : float
            Text margin as a fraction of each side; negative disables it.
        render_timeout : float
            Seconds a single render may take before the request gets a 504.
        render_workers : int
            Size of the thread pool dedicated to rendering.  Timed-out
            renders keep their thread until they finish, so repeated hangs
            can exhaust it; later renders then queue and time out too.

    Server:
        server_host : str
            Bind address.
        server_port : int
            Bind port.
        log_level : str
            Root log level configured by the CLI.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="QUAINT_",
        case_sensitive=False,
        frozen=True,
    )

    # Limits
    max_size: int = Field(default=4000, ge=1, description="Maximum width/height in pixels")
    default_size: int = Field(default=512, ge=1, description="Width when none is requested")

    # Assets
    background_image: Path | None = Field(
        default=Path("/tmp/bg.jpg"),
        description="Optional background bitmap (ignored when missing)",
    )
    font_path: Path | None = Field(
        default=Path("/usr/share/fonts/TTF/Roboto-Bold.ttf"),
        description="TrueType font for the placeholder text",
    )

    # Rendering
    default_fg: str = Field(default="#969696", description="Default foreground color")
    default_bg: str = Field(default="#cccccc", description="Default background color")
    margin_ratio: float = Field(
        default=NO_MARGIN,
        description="Text margin ratio; negative means no margin",
    )
    render_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Per-request rendering deadline in seconds",
    )
    render_workers: int = Field(
        default=8,
        ge=1,
        description="Threads reserved for rasterisation",
    )

    # Server
    server_host: str = Field(default="127.0.0.1", description="Server bind address")
    server_port: int = Field(default=3000, ge=1, le=65535, description="Server port")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level for the CLI entry point",
    )

    @field_validator("default_fg", "default_bg")
    @classmethod
    def _check_hex(cls, value: str) -> str:
        try:
            resolve_color(value, value)
        except BadColorError as e:
            raise ValueError(f"not a 3 or 6 digit hex color: {value!r}") from e
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _check_default_size(self) -> "QuaintConfig":
        if self.default_size > self.max_size:
            raise ValueError(
                f"default_size ({self.default_size}) exceeds max_size ({self.max_size})"
            )
        return self


# Global configuration instance used by the CLI entry point.
config = QuaintConfig()

"""Default configuration values for iCrop."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Final, Mapping

# ---------------------------------------------------------------------------
# Layout constants
# ---------------------------------------------------------------------------

# Margin kept free on every side of the viewport when the crop mask is laid
# out.  The mask is the largest crop-shaped rectangle inside what remains.
VIEWPORT_PADDING: Final[float] = 100.0

# ``maxScale = minScale * MAX_SCALE_FACTOR``.  A factor of 1 collapses the
# zoom range and pins the zoom slider to 0.
MAX_SCALE_FACTOR: Final[float] = 4.0

# ---------------------------------------------------------------------------
# Input constants
# ---------------------------------------------------------------------------

# Zoom change per wheel unit.  Negative so that scrolling down zooms out.
WHEEL_ZOOM_SENSITIVITY: Final[float] = -0.001
KEYBOARD_ZOOM_STEP: Final[float] = 0.1

# ---------------------------------------------------------------------------
# Geometry constants
# ---------------------------------------------------------------------------

GEOMETRY_TOLERANCE: Final[float] = 1e-9
DEFAULT_FOCAL_POINT: Final[tuple[float, float]] = (0.5, 0.5)

# Square container used when rendering crop previews in the side list.
PREVIEW_CONTAINER_SIZE: Final[tuple[float, float]] = (120.0, 120.0)


@dataclass(frozen=True)
class EngineSettings:
    """Tunables shared by the layout, zoom and input handling code."""

    viewport_padding: float = VIEWPORT_PADDING
    max_scale_factor: float = MAX_SCALE_FACTOR
    wheel_sensitivity: float = WHEEL_ZOOM_SENSITIVITY
    keyboard_step: float = KEYBOARD_ZOOM_STEP

    def __post_init__(self) -> None:
        if self.viewport_padding < 0.0:
            raise ValueError("viewport_padding must not be negative")
        if self.max_scale_factor < 1.0:
            raise ValueError("max_scale_factor must be at least 1")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None) -> "EngineSettings":
        """Build settings from a partial mapping, ignoring unknown keys."""

        if not values:
            return cls()
        known = {item.name for item in fields(cls)}
        kwargs = {key: float(value) for key, value in values.items() if key in known}
        return cls(**kwargs)


__all__ = [
    "DEFAULT_FOCAL_POINT",
    "EngineSettings",
    "GEOMETRY_TOLERANCE",
    "KEYBOARD_ZOOM_STEP",
    "MAX_SCALE_FACTOR",
    "PREVIEW_CONTAINER_SIZE",
    "VIEWPORT_PADDING",
    "WHEEL_ZOOM_SENSITIVITY",
]

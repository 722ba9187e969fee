"""Geometry and crop data structures used across the engine.

Geometry values are frozen so that a rebuild can compute a complete new
snapshot and swap it in one assignment.  :class:`Crop` is the exception: its
target dimensions never change but ``coordinates`` is rewritten on save.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from ..config import DEFAULT_FOCAL_POINT


@dataclass(frozen=True)
class Inset:
    """Fractions of the displayed image lying outside the mask on each edge."""

    x1: float = 0.0
    y1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0

    def is_valid(self) -> bool:
        values = (self.x1, self.y1, self.x2, self.y2)
        if any(not 0.0 <= value < 1.0 for value in values):
            return False
        return self.x1 + self.x2 < 1.0 and self.y1 + self.y2 < 1.0

    def as_mapping(self) -> dict[str, float]:
        return {"x1": float(self.x1), "y1": float(self.y1), "x2": float(self.x2), "y2": float(self.y2)}

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "Inset":
        return cls(
            x1=float(values.get("x1", 0.0)),
            y1=float(values.get("y1", 0.0)),
            x2=float(values.get("x2", 0.0)),
            y2=float(values.get("y2", 0.0)),
        )


@dataclass(frozen=True)
class FocalPoint:
    """Normalised point of interest used while a crop has no coordinates."""

    left: float = DEFAULT_FOCAL_POINT[0]
    top: float = DEFAULT_FOCAL_POINT[1]

    def as_mapping(self) -> dict[str, float]:
        return {"left": float(self.left), "top": float(self.top)}

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None) -> "FocalPoint":
        if not values:
            return cls()
        default = cls()
        return cls(
            left=float(values.get("left", default.left)),
            top=float(values.get("top", default.top)),
        )


@dataclass
class Crop:
    """A named output crop with a fixed target aspect ratio."""

    alias: str
    target_width: float
    target_height: float
    coordinates: Optional[Inset] = None

    @property
    def aspect_ratio(self) -> float:
        return float(self.target_width) / float(self.target_height)

    @property
    def user_defined(self) -> bool:
        return self.coordinates is not None

    def copy(self) -> "Crop":
        return replace(self)

    def as_mapping(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "alias": self.alias,
            "width": self.target_width,
            "height": self.target_height,
        }
        if self.coordinates is not None:
            payload["coordinates"] = self.coordinates.as_mapping()
        return payload

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "Crop":
        coordinates = values.get("coordinates")
        return cls(
            alias=str(values["alias"]),
            target_width=values["width"],
            target_height=values["height"],
            coordinates=Inset.from_mapping(coordinates) if coordinates else None,
        )


@dataclass(frozen=True)
class ViewportGeometry:
    width: float
    height: float

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


@dataclass(frozen=True)
class MaskGeometry:
    """Crop window laid out in viewport-local coordinates."""

    width: float
    height: float
    left: float
    top: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.left + self.width * 0.5, self.top + self.height * 0.5)


@dataclass(frozen=True)
class ImageGeometry:
    """Displayed image rectangle in viewport-local coordinates."""

    natural_width: float
    natural_height: float
    width: float
    height: float
    left: float
    top: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def aspect_ratio(self) -> float:
        return self.natural_width / self.natural_height

    @property
    def scale(self) -> float:
        return max(self.width / self.natural_width, self.height / self.natural_height)

    def contains_point(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def covers(self, mask: MaskGeometry, tolerance: float = 0.0) -> bool:
        """Return True when *mask* lies entirely inside this rectangle."""

        return (
            self.left <= mask.left + tolerance
            and self.top <= mask.top + tolerance
            and self.right >= mask.right - tolerance
            and self.bottom >= mask.bottom - tolerance
        )

    def moved_to(self, left: float, top: float) -> "ImageGeometry":
        return replace(self, left=left, top=top)

    def rescaled(self, scale: float, left: float, top: float) -> "ImageGeometry":
        return replace(
            self,
            width=self.natural_width * scale,
            height=self.natural_height * scale,
            left=left,
            top=top,
        )


@dataclass(frozen=True)
class ZoomState:
    alpha: float
    min_scale: float
    max_scale: float


@dataclass
class DragState:
    """Transient pointer drag bookkeeping."""

    active: bool = False
    pointer_offset: tuple[float, float] = (0.0, 0.0)

    def reset(self) -> None:
        self.active = False
        self.pointer_offset = (0.0, 0.0)


@dataclass(frozen=True)
class GeometrySnapshot:
    """Read-only state handed to renderers after every change.

    ``mask`` and ``zoom`` are ``None`` in focal-point mode, where the whole
    image is shown and ``focal_point`` marks the point of interest.
    """

    viewport: ViewportGeometry
    image: ImageGeometry
    mask: Optional[MaskGeometry] = None
    zoom: Optional[ZoomState] = None
    focal_point: Optional[FocalPoint] = None
    crop_alias: Optional[str] = None

    @property
    def is_focal_point_mode(self) -> bool:
        return self.mask is None


__all__ = [
    "Crop",
    "DragState",
    "FocalPoint",
    "GeometrySnapshot",
    "ImageGeometry",
    "Inset",
    "MaskGeometry",
    "ViewportGeometry",
    "ZoomState",
]

"""Zoom state and anchor-preserving rescaling of the displayed image."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QPointF

from ..models.types import ImageGeometry, MaskGeometry, ZoomState
from .math_utils import clamp, lerp
from .pan import clamp_position


def anchor_preserving_position(
    anchor_x: float,
    anchor_y: float,
    left: float,
    top: float,
    old_scale: float,
    new_scale: float,
) -> tuple[float, float]:
    """Return the new ``(left, top)`` that keeps the image point under the anchor fixed."""

    ratio = new_scale / old_scale
    return (
        anchor_x - (anchor_x - left) * ratio,
        anchor_y - (anchor_y - top) * ratio,
    )


class ZoomController:
    """Map the ``[0, 1]`` zoom position onto the ``[min_scale, max_scale]`` range."""

    def __init__(self, min_scale: float, max_scale: float, alpha: float = 0.0) -> None:
        self._min_scale = float(min_scale)
        self._max_scale = float(max_scale)
        self._alpha = clamp(float(alpha), 0.0, 1.0)

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def min_scale(self) -> float:
        return self._min_scale

    @property
    def max_scale(self) -> float:
        return self._max_scale

    @property
    def scale(self) -> float:
        return self.scale_at(self._alpha)

    def scale_at(self, alpha: float) -> float:
        return lerp(self._min_scale, self._max_scale, alpha)

    def state(self) -> ZoomState:
        return ZoomState(alpha=self._alpha, min_scale=self._min_scale, max_scale=self._max_scale)

    # ------------------------------------------------------------------
    # Zoom utilities
    # ------------------------------------------------------------------
    def apply_zoom_delta(
        self,
        delta: float,
        image: ImageGeometry,
        mask: MaskGeometry,
        anchor: Optional[QPointF] = None,
    ) -> ImageGeometry:
        """Shift the zoom position by *delta* while keeping *anchor* stationary.

        *anchor* is viewport-local; the mask centre is used when it is omitted.
        The result is clamped so the image keeps covering *mask*.
        """

        old_scale = self.scale
        self._alpha = clamp(self._alpha + float(delta), 0.0, 1.0)
        new_scale = self.scale

        if anchor is None:
            anchor_x, anchor_y = mask.center
        else:
            anchor_x, anchor_y = float(anchor.x()), float(anchor.y())

        if old_scale > 0.0:
            left, top = anchor_preserving_position(
                anchor_x, anchor_y, image.left, image.top, old_scale, new_scale
            )
        else:
            left, top = image.left, image.top

        resized = image.rescaled(new_scale, left, top)
        top, left = clamp_position(resized.top, resized.left, resized, mask)
        return resized.moved_to(left, top)

    def set_alpha(
        self,
        alpha: float,
        image: ImageGeometry,
        mask: MaskGeometry,
        anchor: Optional[QPointF] = None,
    ) -> ImageGeometry:
        """Jump to *alpha*, as a slider bound to the zoom position does."""

        return self.apply_zoom_delta(float(alpha) - self._alpha, image, mask, anchor)


__all__ = ["ZoomController", "anchor_preserving_position"]

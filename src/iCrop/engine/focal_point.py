"""Pointer handling for picking the focal point on the whole image."""

from __future__ import annotations

from PySide6.QtCore import QPointF

from ..models.types import DragState, FocalPoint, ImageGeometry
from .math_utils import clamp


def focal_point_from_pointer(x: float, y: float, image: ImageGeometry) -> FocalPoint:
    """Return the normalised position of ``(x, y)`` on *image*, clamped to the image."""

    local_x = clamp(x - image.left, 0.0, image.width)
    local_y = clamp(y - image.top, 0.0, image.height)
    return FocalPoint(
        left=clamp(local_x / image.width, 0.0, 1.0),
        top=clamp(local_y / image.height, 0.0, 1.0),
    )


def focal_point_marker(focal_point: FocalPoint, image: ImageGeometry) -> QPointF:
    """Return the viewport-local position where the focal point marker is drawn."""

    return QPointF(
        image.left + image.width * focal_point.left,
        image.top + image.height * focal_point.top,
    )


class FocalPointSetter:
    """Press sets the point, dragging moves it, release ends the interaction."""

    def __init__(self) -> None:
        self._drag = DragState()

    def is_dragging(self) -> bool:
        return self._drag.active

    def press(self, pointer: QPointF, image: ImageGeometry) -> FocalPoint | None:
        x, y = float(pointer.x()), float(pointer.y())
        if not image.contains_point(x, y):
            return None
        self._drag.active = True
        return focal_point_from_pointer(x, y, image)

    def move(self, pointer: QPointF, image: ImageGeometry) -> FocalPoint | None:
        if not self._drag.active:
            return None
        return focal_point_from_pointer(float(pointer.x()), float(pointer.y()), image)

    def release(self) -> None:
        self._drag.reset()

    def cancel(self) -> None:
        self._drag.reset()


__all__ = ["FocalPointSetter", "focal_point_from_pointer", "focal_point_marker"]

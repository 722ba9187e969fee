"""
Drag-to-pan state machine and the position clamp that keeps the mask covered.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QPointF

from ..models.types import DragState, ImageGeometry, MaskGeometry
from .math_utils import clamp

_LOGGER = logging.getLogger(__name__)


def clamp_position(
    top: float,
    left: float,
    image: ImageGeometry,
    mask: MaskGeometry,
) -> tuple[float, float]:
    """Return ``(top, left)`` limited so the image rectangle contains *mask*.

    Requires ``image.width >= mask.width`` and ``image.height >= mask.height``,
    which the cover scale guarantees.
    """

    left = clamp(left, mask.right - image.width, mask.left)
    top = clamp(top, mask.bottom - image.height, mask.top)
    return top, left


def clamp_image(image: ImageGeometry, mask: MaskGeometry) -> ImageGeometry:
    """Return *image* moved to the nearest position that covers *mask*."""

    top, left = clamp_position(image.top, image.left, image, mask)
    if top == image.top and left == image.left:
        return image
    return image.moved_to(left, top)


class PanController:
    """Idle -> Dragging -> Idle state machine for panning the image."""

    def __init__(self) -> None:
        self._drag = DragState()

    def is_dragging(self) -> bool:
        return self._drag.active

    def drag_state(self) -> DragState:
        return self._drag

    def press(self, pointer: QPointF, image: ImageGeometry) -> bool:
        """Start dragging when *pointer* (viewport-local) is over *image*."""

        x, y = float(pointer.x()), float(pointer.y())
        if not image.contains_point(x, y):
            return False
        self._drag.active = True
        self._drag.pointer_offset = (x - image.left, y - image.top)
        return True

    def move(
        self,
        pointer: QPointF,
        image: ImageGeometry,
        mask: MaskGeometry,
    ) -> ImageGeometry | None:
        """Return the clamped image for *pointer*, or ``None`` when idle."""

        if not self._drag.active:
            return None
        offset_x, offset_y = self._drag.pointer_offset
        top, left = clamp_position(
            float(pointer.y()) - offset_y,
            float(pointer.x()) - offset_x,
            image,
            mask,
        )
        return image.moved_to(left, top)

    def release(self) -> None:
        self._drag.reset()

    def cancel(self) -> None:
        """Drop an in-progress drag, e.g. after pointer capture was lost."""

        if self._drag.active:
            _LOGGER.debug("Pan drag cancelled")
        self._drag.reset()


__all__ = ["PanController", "clamp_image", "clamp_position"]

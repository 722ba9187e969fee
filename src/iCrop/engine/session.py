"""
Crop session (orchestrator).

Owns the active crop and the shared focal point, rebuilds the mask/image
geometry whenever the crop, viewport or image changes, and routes host input
to the zoom and pan controllers.  Geometry is published as immutable
:class:`~iCrop.models.types.GeometrySnapshot` objects.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Union

from PySide6.QtCore import QObject, QPointF, Qt, Signal

from ..config import EngineSettings
from ..errors import ImageNotReadyError, InvalidGeometry
from ..models.types import (
    Crop,
    FocalPoint,
    GeometrySnapshot,
    ImageGeometry,
    Inset,
    ViewportGeometry,
)
from .coordinates import image_to_inset, place_image
from .focal_point import FocalPointSetter
from .layout import compute_layout, fit_inside
from .pan import PanController
from .zoom import ZoomController

_LOGGER = logging.getLogger(__name__)

KeyLike = Union[str, int, Qt.Key]

_KEY_DIRECTIONS: dict[object, int] = {
    "ArrowUp": 1,
    "ArrowDown": -1,
    Qt.Key.Key_Up: 1,
    Qt.Key.Key_Down: -1,
}


class CropSession(QObject):
    """Edit one crop (or the focal point) of a single image."""

    geometryChanged = Signal(object)
    cropChanged = Signal(object)
    focalPointChanged = Signal(float, float)
    canceled = Signal()

    def __init__(
        self,
        settings: EngineSettings | None = None,
        *,
        src: str = "",
        focal_point: FocalPoint | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings or EngineSettings()
        self._src = src
        self._focal_point = focal_point or FocalPoint()

        self._crop: Optional[Crop] = None
        self._viewport: Optional[ViewportGeometry] = None
        self._viewport_origin = QPointF(0.0, 0.0)
        self._natural_size: Optional[tuple[float, float]] = None
        self._rebuild_pending: bool = False

        self._snapshot: Optional[GeometrySnapshot] = None
        self._zoom: Optional[ZoomController] = None
        self._pan = PanController()
        self._focus_setter = FocalPointSetter()

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    def settings(self) -> EngineSettings:
        return self._settings

    def src(self) -> str:
        return self._src

    def focal_point(self) -> FocalPoint:
        return self._focal_point

    def active_crop(self) -> Optional[Crop]:
        return self._crop

    def snapshot(self) -> Optional[GeometrySnapshot]:
        """Return the geometry to render, or ``None`` while layout is undefined."""

        return self._snapshot

    def is_image_ready(self) -> bool:
        return self._natural_size is not None

    def is_rebuild_pending(self) -> bool:
        return self._rebuild_pending

    def is_focal_point_mode(self) -> bool:
        return self._crop is None

    def is_dragging(self) -> bool:
        return self._pan.is_dragging() or self._focus_setter.is_dragging()

    def natural_size(self) -> tuple[float, float]:
        if self._natural_size is None:
            raise ImageNotReadyError(f"Image {self._src!r} has not reported its size yet")
        return self._natural_size

    def zoom_alpha(self) -> float:
        return self._zoom.alpha if self._zoom is not None else 0.0

    def scale(self) -> Optional[float]:
        return self._zoom.scale if self._zoom is not None else None

    # ------------------------------------------------------------------
    # Host surface and image resource
    # ------------------------------------------------------------------
    def set_src(self, src: str) -> None:
        """Switch to another image; layout waits for its size again."""

        if src == self._src:
            return
        self._src = src
        self._natural_size = None
        self._discard_geometry()
        self._rebuild_pending = True
        self.geometryChanged.emit(None)

    def set_image_size(self, natural_width: float, natural_height: float) -> Optional[GeometrySnapshot]:
        """Record the decoded image size and run any rebuild that was waiting for it."""

        self._natural_size = (float(natural_width), float(natural_height))
        _LOGGER.debug("Image %r ready: %sx%s", self._src, natural_width, natural_height)
        return self.rebuild()

    def set_viewport(
        self,
        width: float,
        height: float,
        origin: QPointF | None = None,
    ) -> Optional[GeometrySnapshot]:
        """Update the viewport size and its on-screen origin, then rebuild."""

        self._viewport = ViewportGeometry(float(width), float(height))
        if origin is not None:
            self._viewport_origin = QPointF(origin)
        return self.rebuild()

    def set_focal_point(self, focal_point: FocalPoint) -> None:
        """Replace the shared focal point without emitting a change event."""

        self._focal_point = focal_point
        if self._snapshot is None:
            return
        if self._crop is None or self._crop.coordinates is None:
            self.rebuild()

    # ------------------------------------------------------------------
    # Session operations
    # ------------------------------------------------------------------
    def select_crop(self, crop: Crop) -> Optional[GeometrySnapshot]:
        self._crop = crop
        return self.rebuild()

    def select_focal_point_mode(self) -> Optional[GeometrySnapshot]:
        self._crop = None
        return self.rebuild()

    def reset(self) -> Optional[GeometrySnapshot]:
        """Forget the saved coordinates of the active crop and place it by focal point."""

        if self._crop is None:
            return self._snapshot
        self._crop.coordinates = None
        return self.rebuild()

    def save(self) -> Optional[Inset]:
        """Write the current crop window onto the active crop and emit ``cropChanged``."""

        snapshot = self._snapshot
        if self._crop is None or snapshot is None or snapshot.mask is None:
            _LOGGER.warning("Save requested without an active crop layout; ignoring")
            return None
        self._pan.release()
        inset = image_to_inset(snapshot.image, snapshot.mask)
        self._crop.coordinates = inset
        _LOGGER.debug("Saved crop %r as %s", self._crop.alias, inset)
        self.cropChanged.emit(inset)
        return inset

    def cancel(self) -> None:
        """Drop unsaved pan/zoom changes and restore the persisted crop."""

        self._pan.cancel()
        self._focus_setter.cancel()
        if self._snapshot is not None:
            self.rebuild()
        self.canceled.emit()

    def rebuild(self) -> Optional[GeometrySnapshot]:
        """Recompute all geometry from scratch and publish it.

        Returns ``None`` (and remembers the request) while the viewport or the
        image size is unknown.  :class:`~iCrop.errors.InvalidGeometry`
        propagates after the previous snapshot has been discarded.
        """

        self._pan.cancel()
        self._focus_setter.cancel()
        if self._natural_size is None or self._viewport is None:
            self._rebuild_pending = True
            return None
        self._rebuild_pending = False

        try:
            snapshot, zoom = self._build()
        except InvalidGeometry:
            self._discard_geometry()
            self.geometryChanged.emit(None)
            raise

        self._zoom = zoom
        self._publish(snapshot)
        return snapshot

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def handle_pointer_press(self, position: QPointF) -> bool:
        """Start a pan drag, or set the focal point in focal-point mode."""

        snapshot = self._snapshot
        if snapshot is None:
            return False
        local = self._to_local(position)
        if snapshot.is_focal_point_mode:
            focal_point = self._focus_setter.press(local, snapshot.image)
            if focal_point is None:
                return False
            self._apply_focal_point(focal_point)
            return True
        return self._pan.press(local, snapshot.image)

    def handle_pointer_move(self, position: QPointF) -> bool:
        snapshot = self._snapshot
        if snapshot is None:
            return False
        local = self._to_local(position)
        if snapshot.is_focal_point_mode:
            focal_point = self._focus_setter.move(local, snapshot.image)
            if focal_point is None:
                return False
            self._apply_focal_point(focal_point)
            return True
        image = self._pan.move(local, snapshot.image, snapshot.mask)
        if image is None:
            return False
        self._commit_image(image)
        return True

    def handle_pointer_release(self) -> None:
        self._pan.release()
        self._focus_setter.release()

    def handle_pointer_cancel(self) -> None:
        """Pointer capture was lost; end any drag without further movement."""

        self._pan.cancel()
        self._focus_setter.cancel()

    def handle_wheel(self, delta: float, position: QPointF | None = None) -> bool:
        """Zoom by a wheel *delta*, anchored at the pointer when *position* is given."""

        if not self._can_zoom():
            return False
        anchor = self._to_local(position) if position is not None else None
        return self._apply_zoom_delta(float(delta) * self._settings.wheel_sensitivity, anchor)

    def handle_key(self, key: KeyLike) -> bool:
        """Zoom one keyboard step for ``ArrowUp``/``ArrowDown``; other keys are ignored."""

        direction = _KEY_DIRECTIONS.get(key)
        if direction is None or not self._can_zoom():
            return False
        return self._apply_zoom_delta(direction * self._settings.keyboard_step, None)

    def set_zoom(self, alpha: float) -> bool:
        """Set the zoom position directly, as the zoom slider does."""

        if not self._can_zoom():
            return False
        snapshot = self._snapshot
        before = self._zoom.alpha
        image = self._zoom.set_alpha(alpha, snapshot.image, snapshot.mask)
        return self._commit_zoom(before, image)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _build(self) -> tuple[GeometrySnapshot, Optional[ZoomController]]:
        viewport = self._viewport
        natural_width, natural_height = self._natural_size
        if self._crop is None:
            width, height, left, top = fit_inside(viewport, natural_width, natural_height)
            image = ImageGeometry(natural_width, natural_height, width, height, left, top)
            snapshot = GeometrySnapshot(
                viewport=viewport,
                image=image,
                focal_point=self._focal_point,
            )
            return snapshot, None

        crop = self._crop
        layout = compute_layout(
            viewport,
            crop.target_width,
            crop.target_height,
            natural_width,
            natural_height,
            padding=self._settings.viewport_padding,
            max_scale_factor=self._settings.max_scale_factor,
        )
        placement = place_image(
            crop.aspect_ratio,
            crop.coordinates,
            self._focal_point,
            layout.mask,
            natural_width,
            natural_height,
            layout.min_scale,
            layout.max_scale,
        )
        zoom = ZoomController(layout.min_scale, layout.max_scale, placement.alpha)
        _LOGGER.debug(
            "Rebuilt crop %r from %s, alpha=%.4f",
            crop.alias,
            "coordinates" if placement.from_coordinates else "focal point",
            placement.alpha,
        )
        snapshot = GeometrySnapshot(
            viewport=viewport,
            image=placement.image,
            mask=layout.mask,
            zoom=zoom.state(),
            focal_point=self._focal_point,
            crop_alias=crop.alias,
        )
        return snapshot, zoom

    def _can_zoom(self) -> bool:
        return (
            self._snapshot is not None
            and self._snapshot.mask is not None
            and self._zoom is not None
        )

    def _apply_zoom_delta(self, delta: float, anchor: QPointF | None) -> bool:
        snapshot = self._snapshot
        before = self._zoom.alpha
        image = self._zoom.apply_zoom_delta(delta, snapshot.image, snapshot.mask, anchor)
        return self._commit_zoom(before, image)

    def _commit_zoom(self, before: float, image: ImageGeometry) -> bool:
        if self._zoom.alpha == before:
            # Saturated at either end of the range.
            return False
        self._commit_image(image)
        return True

    def _apply_focal_point(self, focal_point: FocalPoint) -> None:
        self._focal_point = focal_point
        if self._snapshot is not None:
            self._publish(replace(self._snapshot, focal_point=focal_point))
        self.focalPointChanged.emit(float(focal_point.left), float(focal_point.top))

    def _commit_image(self, image: ImageGeometry) -> None:
        zoom_state = self._zoom.state() if self._zoom is not None else None
        self._publish(replace(self._snapshot, image=image, zoom=zoom_state))

    def _publish(self, snapshot: GeometrySnapshot) -> None:
        self._snapshot = snapshot
        self.geometryChanged.emit(snapshot)

    def _discard_geometry(self) -> None:
        self._pan.cancel()
        self._focus_setter.cancel()
        self._snapshot = None
        self._zoom = None

    def _to_local(self, position: QPointF) -> QPointF:
        return QPointF(
            float(position.x()) - self._viewport_origin.x(),
            float(position.y()) - self._viewport_origin.y(),
        )


__all__ = ["CropSession"]

"""Property editor: a list of crops for one image plus the shared focal point."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from PySide6.QtCore import QObject, Signal

from .config import PREVIEW_CONTAINER_SIZE, EngineSettings
from .engine.preview import PreviewGeometry, compute_preview_geometry
from .engine.session import CropSession
from .errors import UnknownCropError
from .models.editor_value import CropperValue
from .models.types import Crop, FocalPoint, Inset

_LOGGER = logging.getLogger(__name__)


class CropperEditor(QObject):
    """Coordinate a :class:`CropSession` with the persisted editor value.

    The session always edits a *copy* of the selected crop; the editor only
    writes it back into its crop list when the session saves.
    """

    valueChanged = Signal(object)
    currentCropChanged = Signal(object)

    def __init__(
        self,
        settings: EngineSettings | None = None,
        *,
        session: CropSession | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings or EngineSettings()
        self._session = session or CropSession(self._settings, parent=self)
        self._value: Optional[CropperValue] = None
        self._draft = CropperValue()
        self._current_crop: Optional[Crop] = None

        self._session.cropChanged.connect(self._on_crop_saved)
        self._session.canceled.connect(self._on_session_canceled)
        self._session.focalPointChanged.connect(self._on_focal_point_changed)

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    def session(self) -> CropSession:
        return self._session

    def value(self) -> Optional[CropperValue]:
        return self._value

    def crops(self) -> list[Crop]:
        return list(self._draft.crops)

    def focal_point(self) -> FocalPoint:
        return self._draft.focal_point

    def src(self) -> str:
        return self._draft.src

    def current_crop(self) -> Optional[Crop]:
        return self._current_crop

    # ------------------------------------------------------------------
    # Value management
    # ------------------------------------------------------------------
    def set_value(self, value: CropperValue | Mapping[str, Any] | None) -> None:
        """Load *value*; ``None`` clears the editor back to its defaults."""

        if value is None:
            self._value = None
            loaded = CropperValue()
        else:
            loaded = value if isinstance(value, CropperValue) else CropperValue.from_mapping(value)
            loaded = loaded.copy()
            self._value = loaded.copy()

        self._draft = loaded
        self._current_crop = None

        self._session.set_src(loaded.src)
        self._session.set_focal_point(loaded.focal_point)
        self._session.select_focal_point_mode()
        self.currentCropChanged.emit(None)

    def save(self) -> CropperValue:
        """Publish the edited crops and focal point as the new value."""

        self._value = self._draft.copy()
        _LOGGER.debug("Editor value saved with %d crops", len(self._value.crops))
        self.valueChanged.emit(self._value)
        return self._value

    # ------------------------------------------------------------------
    # Crop selection
    # ------------------------------------------------------------------
    def select_crop(self, alias: str) -> Crop:
        self._current_crop = self._require(alias).copy()
        self._session.select_crop(self._current_crop)
        self.currentCropChanged.emit(self._current_crop)
        return self._current_crop

    def close_crop(self) -> None:
        """Return to focal-point editing without touching any crop."""

        self._current_crop = None
        self._session.select_focal_point_mode()
        self.currentCropChanged.emit(None)

    def reset_crop(self, alias: str) -> None:
        """Remove the saved coordinates of one crop."""

        self._require(alias).coordinates = None
        if self._current_crop is not None and self._current_crop.alias == alias:
            self._session.reset()

    def previews(
        self,
        container_size: tuple[float, float] = PREVIEW_CONTAINER_SIZE,
    ) -> list[PreviewGeometry]:
        """Return preview geometry for every crop; empty while the image is loading."""

        if not self._session.is_image_ready():
            return []
        natural_width, natural_height = self._session.natural_size()
        container_width, container_height = container_size
        return [
            compute_preview_geometry(
                container_width,
                container_height,
                crop,
                natural_width,
                natural_height,
                self._draft.focal_point,
                self._settings.max_scale_factor,
            )
            for crop in self._draft.crops
        ]

    # ------------------------------------------------------------------
    # Session callbacks
    # ------------------------------------------------------------------
    def _on_crop_saved(self, inset: Inset) -> None:
        current = self._current_crop
        if current is None:
            return
        index = self._draft.index_of(current.alias)
        if index < 0:
            _LOGGER.warning("Saved crop %r is no longer part of the value; ignoring", current.alias)
            return
        self._draft.crops[index] = Crop(
            alias=current.alias,
            target_width=current.target_width,
            target_height=current.target_height,
            coordinates=inset,
        )
        self.close_crop()

    def _on_session_canceled(self) -> None:
        if self._current_crop is not None:
            self.close_crop()

    def _on_focal_point_changed(self, left: float, top: float) -> None:
        self._draft.focal_point = FocalPoint(left=left, top=top)

    def _require(self, alias: str) -> Crop:
        crop = self._draft.find(alias)
        if crop is not None:
            return crop
        raise UnknownCropError(f"No crop with alias {alias!r}")


__all__ = ["CropperEditor"]

"""Geometry for the small per-crop previews shown next to the editor."""

from __future__ import annotations

from dataclasses import dataclass

from ..config import MAX_SCALE_FACTOR
from ..models.types import Crop, FocalPoint, ImageGeometry, MaskGeometry, ViewportGeometry
from .coordinates import place_image
from .layout import compute_mask_geometry, compute_scale_bounds


@dataclass(frozen=True)
class PreviewGeometry:
    """Crop-shaped frame and the image placed inside it, in frame coordinates."""

    alias: str
    frame_width: float
    frame_height: float
    image: ImageGeometry
    user_defined: bool


def compute_preview_geometry(
    container_width: float,
    container_height: float,
    crop: Crop,
    natural_width: float,
    natural_height: float,
    focal_point: FocalPoint,
    max_scale_factor: float = MAX_SCALE_FACTOR,
) -> PreviewGeometry:
    """Return how *crop* of an image renders inside a preview container.

    The frame is the largest crop-shaped rectangle inside the container; the
    image is placed with the same rules the editor uses, so a preview matches
    what the editor shows inside its mask.
    """

    fitted = compute_mask_geometry(
        ViewportGeometry(container_width, container_height),
        crop.target_width,
        crop.target_height,
        padding=0.0,
    )
    frame = MaskGeometry(width=fitted.width, height=fitted.height, left=0.0, top=0.0)
    min_scale, max_scale = compute_scale_bounds(
        frame, natural_width, natural_height, max_scale_factor
    )
    placement = place_image(
        crop.aspect_ratio,
        crop.coordinates,
        focal_point,
        frame,
        natural_width,
        natural_height,
        min_scale,
        max_scale,
    )
    return PreviewGeometry(
        alias=crop.alias,
        frame_width=frame.width,
        frame_height=frame.height,
        image=placement.image,
        user_defined=crop.user_defined,
    )


__all__ = ["PreviewGeometry", "compute_preview_geometry"]

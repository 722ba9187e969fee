"""Mask layout and zoom bounds derived from the viewport and crop shape."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import MAX_SCALE_FACTOR, VIEWPORT_PADDING
from ..errors import InvalidGeometry
from ..models.types import MaskGeometry, ViewportGeometry

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutResult:
    mask: MaskGeometry
    min_scale: float
    max_scale: float


def _require_positive(**dimensions: float) -> None:
    for name, value in dimensions.items():
        if not value > 0.0:
            raise InvalidGeometry(f"{name} must be positive, got {value!r}")


def compute_mask_geometry(
    viewport: ViewportGeometry,
    target_width: float,
    target_height: float,
    padding: float = VIEWPORT_PADDING,
) -> MaskGeometry:
    """Return the largest crop-shaped rectangle centred in the padded viewport."""

    _require_positive(
        viewport_width=viewport.width,
        viewport_height=viewport.height,
        target_width=target_width,
        target_height=target_height,
    )
    available_width = viewport.width - padding * 2.0
    available_height = viewport.height - padding * 2.0
    _require_positive(available_width=available_width, available_height=available_height)

    crop_aspect = float(target_width) / float(target_height)
    if crop_aspect > viewport.aspect_ratio:
        mask_width = available_width
        mask_height = mask_width / crop_aspect
    else:
        mask_height = available_height
        mask_width = mask_height * crop_aspect

    return MaskGeometry(
        width=mask_width,
        height=mask_height,
        left=(viewport.width - mask_width) / 2.0,
        top=(viewport.height - mask_height) / 2.0,
    )


def compute_scale_bounds(
    mask: MaskGeometry,
    natural_width: float,
    natural_height: float,
    max_scale_factor: float = MAX_SCALE_FACTOR,
) -> tuple[float, float]:
    """Return ``(min_scale, max_scale)`` where ``min_scale`` is the cover scale."""

    _require_positive(natural_width=natural_width, natural_height=natural_height)
    min_scale = max(mask.width / float(natural_width), mask.height / float(natural_height))
    return min_scale, min_scale * max_scale_factor


def compute_layout(
    viewport: ViewportGeometry,
    target_width: float,
    target_height: float,
    natural_width: float,
    natural_height: float,
    *,
    padding: float = VIEWPORT_PADDING,
    max_scale_factor: float = MAX_SCALE_FACTOR,
) -> LayoutResult:
    """Lay out the mask and compute the zoom range for one crop."""

    mask = compute_mask_geometry(viewport, target_width, target_height, padding)
    min_scale, max_scale = compute_scale_bounds(mask, natural_width, natural_height, max_scale_factor)
    _LOGGER.debug(
        "Layout viewport=%sx%s mask=%.3fx%.3f@(%.3f, %.3f) scale=[%.5f, %.5f]",
        viewport.width,
        viewport.height,
        mask.width,
        mask.height,
        mask.left,
        mask.top,
        min_scale,
        max_scale,
    )
    return LayoutResult(mask=mask, min_scale=min_scale, max_scale=max_scale)


def fit_inside(
    viewport: ViewportGeometry,
    natural_width: float,
    natural_height: float,
) -> tuple[float, float, float, float]:
    """Return ``(width, height, left, top)`` of the image contained and centred in *viewport*."""

    _require_positive(
        viewport_width=viewport.width,
        viewport_height=viewport.height,
        natural_width=natural_width,
        natural_height=natural_height,
    )
    scale = min(viewport.width / float(natural_width), viewport.height / float(natural_height))
    width = natural_width * scale
    height = natural_height * scale
    return width, height, (viewport.width - width) / 2.0, (viewport.height - height) / 2.0


__all__ = ["LayoutResult", "compute_layout", "compute_mask_geometry", "compute_scale_bounds", "fit_inside"]

"""Conversion between persisted crop insets and on-screen geometry.

Insets are fractions of the *displayed image* lying outside the mask on each
edge.  Going forward, the axis that matches the crop orientation (width for
landscape crops, height otherwise) fixes the image size from the known mask
size and the inset sum along that axis; the other axis follows from the
image's own aspect ratio.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ..config import DEFAULT_FOCAL_POINT, GEOMETRY_TOLERANCE
from ..errors import DivisionUndefined, InvalidGeometry, InvalidInset
from ..models.types import FocalPoint, ImageGeometry, Inset, MaskGeometry
from .math_utils import clamp, extrapolate_from_inset, inverse_lerp, lerp
from .pan import clamp_image
from .zoom import anchor_preserving_position

_LOGGER = logging.getLogger(__name__)


def inset_to_image(
    inset: Inset,
    crop_aspect: float,
    mask: MaskGeometry,
    natural_width: float,
    natural_height: float,
) -> ImageGeometry:
    """Place the image so that *inset* describes the part hidden by *mask*.

    Raises :class:`~iCrop.errors.InvalidInset` when the inset sum along the
    driving axis is not in ``[0, 1)``.
    """

    image_aspect = float(natural_width) / float(natural_height)
    # Square crops take the height branch.
    if crop_aspect > 1.0:
        image_width = extrapolate_from_inset(mask.width, inset.x1 + inset.x2)
        image_height = image_width / image_aspect
    else:
        image_height = extrapolate_from_inset(mask.height, inset.y1 + inset.y2)
        image_width = image_height * image_aspect

    return ImageGeometry(
        natural_width=natural_width,
        natural_height=natural_height,
        width=image_width,
        height=image_height,
        left=mask.left - image_width * inset.x1,
        top=mask.top - image_height * inset.y1,
    )


def focal_point_to_image(
    focal_point: FocalPoint,
    mask: MaskGeometry,
    natural_width: float,
    natural_height: float,
    min_scale: float,
) -> ImageGeometry:
    """Show the image at cover scale with the focal point selecting the slack position.

    A non-finite focal component is replaced by the default centre.
    """

    focal_left, focal_top = focal_point.left, focal_point.top
    if not (math.isfinite(focal_left) and math.isfinite(focal_top)):
        _LOGGER.warning("Ignoring non-finite focal point %s", focal_point)
        default_left, default_top = DEFAULT_FOCAL_POINT
        focal_left = focal_left if math.isfinite(focal_left) else default_left
        focal_top = focal_top if math.isfinite(focal_top) else default_top

    image_width = natural_width * min_scale
    image_height = natural_height * min_scale
    if (
        image_width < mask.width - GEOMETRY_TOLERANCE
        or image_height < mask.height - GEOMETRY_TOLERANCE
    ):
        raise InvalidGeometry(
            f"image {image_width:.3f}x{image_height:.3f} does not cover mask "
            f"{mask.width:.3f}x{mask.height:.3f}"
        )

    return ImageGeometry(
        natural_width=natural_width,
        natural_height=natural_height,
        width=image_width,
        height=image_height,
        left=lerp(mask.left, mask.right - image_width, focal_left),
        top=lerp(mask.top, mask.bottom - image_height, focal_top),
    )


def image_to_inset(image: ImageGeometry, mask: MaskGeometry) -> Inset:
    """Return the insets describing *mask* relative to the displayed *image*."""

    return Inset(
        x1=(mask.left - image.left) / image.width,
        y1=(mask.top - image.top) / image.height,
        x2=abs(mask.right - image.right) / image.width,
        y2=abs(mask.bottom - image.bottom) / image.height,
    )


def zoom_alpha_for(scale: float, min_scale: float, max_scale: float) -> float:
    """Return the zoom position of *scale*; an empty zoom range maps to ``0``."""

    try:
        return inverse_lerp(min_scale, max_scale, scale)
    except DivisionUndefined:
        return 0.0


@dataclass(frozen=True)
class Placement:
    """Initial image geometry for a crop plus the zoom position it implies."""

    image: ImageGeometry
    alpha: float
    from_coordinates: bool


def place_image(
    crop_aspect: float,
    coordinates: Optional[Inset],
    focal_point: FocalPoint,
    mask: MaskGeometry,
    natural_width: float,
    natural_height: float,
    min_scale: float,
    max_scale: float,
) -> Placement:
    """Place the image from saved *coordinates*, or from *focal_point* without them.

    Insets that cannot describe a crop are logged and ignored.  A saved crop
    whose scale falls outside ``[min_scale, max_scale]`` is rescaled about the
    mask centre to the nearest bound.
    """

    if coordinates is not None:
        try:
            if not coordinates.is_valid():
                raise InvalidInset(f"inset {coordinates} is outside the unit range")
            image = inset_to_image(coordinates, crop_aspect, mask, natural_width, natural_height)
        except InvalidInset as exc:
            _LOGGER.warning("Ignoring saved crop coordinates, using focal point: %s", exc)
        else:
            scale = image.scale
            bounded = clamp(scale, min_scale, max_scale)
            if abs(bounded - scale) > GEOMETRY_TOLERANCE * max(scale, 1.0):
                _LOGGER.debug("Saved crop scale %.6f outside [%.6f, %.6f]", scale, min_scale, max_scale)
                center_x, center_y = mask.center
                left, top = anchor_preserving_position(
                    center_x, center_y, image.left, image.top, scale, bounded
                )
                image = image.rescaled(bounded, left, top)
            alpha = clamp(zoom_alpha_for(bounded, min_scale, max_scale), 0.0, 1.0)
            return Placement(image=clamp_image(image, mask), alpha=alpha, from_coordinates=True)

    image = focal_point_to_image(focal_point, mask, natural_width, natural_height, min_scale)
    return Placement(image=image, alpha=0.0, from_coordinates=False)


__all__ = [
    "Placement",
    "focal_point_to_image",
    "image_to_inset",
    "inset_to_image",
    "place_image",
    "zoom_alpha_for",
]

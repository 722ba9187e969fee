"""Tests for crop preview geometry."""

import pytest

from iCrop.engine.preview import compute_preview_geometry
from iCrop.models.types import Crop, FocalPoint, Inset


def test_square_preview_uses_focal_point(square_crop):
    preview = compute_preview_geometry(120, 120, square_crop, 2000, 1000, FocalPoint())

    assert preview.alias == "square"
    assert preview.frame_width == pytest.approx(120.0)
    assert preview.frame_height == pytest.approx(120.0)
    assert not preview.user_defined
    assert preview.image.width == pytest.approx(240.0)
    assert preview.image.height == pytest.approx(120.0)
    assert preview.image.left == pytest.approx(-60.0)
    assert preview.image.top == pytest.approx(0.0)


def test_landscape_preview_frame_fits_container(landscape_crop):
    preview = compute_preview_geometry(120, 120, landscape_crop, 2000, 1000, FocalPoint(0.0, 0.0))

    assert preview.frame_width == pytest.approx(120.0)
    assert preview.frame_height == pytest.approx(67.5)
    assert preview.image.width == pytest.approx(135.0)
    assert preview.image.left == pytest.approx(0.0)


def test_preview_follows_saved_coordinates():
    crop = Crop("square", 1000, 1000, coordinates=Inset(0.0, 0.0, 0.5, 0.5))
    preview = compute_preview_geometry(120, 120, crop, 2000, 1000, FocalPoint(1.0, 1.0))

    assert preview.user_defined
    assert preview.image.width == pytest.approx(480.0)
    assert preview.image.height == pytest.approx(240.0)
    assert preview.image.left == pytest.approx(0.0)
    assert preview.image.top == pytest.approx(0.0)


@pytest.mark.parametrize("focal", [FocalPoint(0.0, 0.0), FocalPoint(0.3, 0.9), FocalPoint(1.0, 1.0)])
def test_preview_image_covers_frame(portrait_crop, focal):
    preview = compute_preview_geometry(120, 120, portrait_crop, 1600, 900, focal)
    assert preview.image.left <= 1e-9
    assert preview.image.top <= 1e-9
    assert preview.image.right >= preview.frame_width - 1e-9
    assert preview.image.bottom >= preview.frame_height - 1e-9


def test_preview_frame_is_largest_fit_in_wide_container():
    crop = Crop("banner", 1200, 1000)
    preview = compute_preview_geometry(200, 100, crop, 2000, 1000, FocalPoint())
    assert preview.frame_width == pytest.approx(120.0)
    assert preview.frame_height == pytest.approx(100.0)

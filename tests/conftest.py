import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Ensure the project sources are importable without installing the package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QCoreApplication  # noqa: E402

from iCrop.models.types import Crop, FocalPoint, ImageGeometry, MaskGeometry  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


@pytest.fixture
def square_crop() -> Crop:
    return Crop(alias="square", target_width=1000, target_height=1000)


@pytest.fixture
def landscape_crop() -> Crop:
    return Crop(alias="desktop", target_width=1920, target_height=1080)


@pytest.fixture
def portrait_crop() -> Crop:
    return Crop(alias="mobile", target_width=400, target_height=800)


@pytest.fixture
def square_mask() -> MaskGeometry:
    """Mask for a square crop in an 800x600 viewport with 100 padding."""
    return MaskGeometry(width=400.0, height=400.0, left=200.0, top=100.0)


@pytest.fixture
def centred_image() -> ImageGeometry:
    """2000x1000 image at cover scale 0.4, centred behind the square mask."""
    return ImageGeometry(
        natural_width=2000.0,
        natural_height=1000.0,
        width=800.0,
        height=400.0,
        left=0.0,
        top=100.0,
    )


@pytest.fixture
def centre_focal_point() -> FocalPoint:
    return FocalPoint(0.5, 0.5)

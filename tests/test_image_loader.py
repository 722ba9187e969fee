"""Tests for reading image sizes."""

import pytest
from PIL import Image

from iCrop.errors import ImageLoadError
from iCrop.utils.image_loader import read_natural_size


@pytest.mark.parametrize("suffix", [".png", ".jpg"])
def test_reads_natural_size(tmp_path, qapp, suffix):
    path = tmp_path / f"image{suffix}"
    Image.new("RGB", (64, 48), "red").save(path)
    assert read_natural_size(path) == (64, 48)


def test_missing_file_raises(tmp_path):
    with pytest.raises(ImageLoadError):
        read_natural_size(tmp_path / "missing.png")


def test_garbage_file_raises(tmp_path, qapp):
    path = tmp_path / "noise.png"
    path.write_bytes(b"definitely not an image")
    with pytest.raises(ImageLoadError):
        read_natural_size(path)

"""Read the intrinsic pixel size of an image resource."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError
from PySide6.QtGui import QImageReader

from ..errors import ImageLoadError

_LOGGER = logging.getLogger(__name__)


def read_natural_size(source: Path) -> tuple[int, int]:
    """Return ``(width, height)`` of *source* without decoding the pixels.

    ``QImageReader`` answers from the file header for most formats.  Formats
    that Qt cannot identify are retried with Pillow, which also only parses
    the header on ``open``.
    """

    path = Path(source)
    if not path.is_file():
        raise ImageLoadError(f"Image not found: {path}")

    reader = QImageReader(str(path))
    reader.setAutoTransform(True)
    size = reader.size()
    if size.isValid() and not size.isEmpty():
        return int(size.width()), int(size.height())

    _LOGGER.debug("QImageReader could not size %s (%s); trying Pillow", path, reader.errorString())
    try:
        with Image.open(path) as image:
            width, height = image.size
    except (OSError, UnidentifiedImageError) as exc:
        raise ImageLoadError(f"Cannot read image size of {path}: {exc}") from exc
    if width <= 0 or height <= 0:
        raise ImageLoadError(f"Image {path} reports an empty size")
    return int(width), int(height)


__all__ = ["read_natural_size"]

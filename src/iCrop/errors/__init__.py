"""Custom exception hierarchy for iCrop."""

from __future__ import annotations


class CropperError(Exception):
    """Base class for all custom errors raised by iCrop."""


# --- Geometry errors ---

class GeometryError(CropperError):
    """Base class for failures of the pure geometry computations."""


class InvalidGeometry(GeometryError):
    """Raised when a viewport, image or crop dimension is not positive."""


class InvalidInset(GeometryError):
    """Raised when an inset sum leaves no positive crop size."""


class DivisionUndefined(GeometryError):
    """Raised when an inverse interpolation is requested over an empty range."""


# --- Image resource errors ---

class ImageNotReadyError(CropperError):
    """Raised when layout is requested before the image reported its size."""


class ImageLoadError(CropperError):
    """Raised when the natural size of an image file cannot be read."""


# --- Editor errors ---

class EditorValueError(CropperError):
    """Raised when a persisted editor value fails validation."""


class UnknownCropError(CropperError):
    """Raised when a crop alias is not part of the current editor value."""


__all__ = [
    "CropperError",
    "DivisionUndefined",
    "EditorValueError",
    "GeometryError",
    "ImageLoadError",
    "ImageNotReadyError",
    "InvalidGeometry",
    "InvalidInset",
    "UnknownCropError",
]

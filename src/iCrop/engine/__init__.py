"""
Crop transform engine.

Pure geometry (math utilities, layout, coordinate conversion) plus the
zoom/pan controllers and the :class:`CropSession` orchestrator that wires
them to host input events.
"""

from .coordinates import focal_point_to_image, image_to_inset, inset_to_image
from .layout import LayoutResult, compute_layout
from .pan import PanController, clamp_position
from .session import CropSession
from .zoom import ZoomController

__all__ = [
    "CropSession",
    "LayoutResult",
    "PanController",
    "ZoomController",
    "clamp_position",
    "compute_layout",
    "focal_point_to_image",
    "image_to_inset",
    "inset_to_image",
]

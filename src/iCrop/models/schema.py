"""Schema helpers for the persisted crop editor value."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import DEFAULT_FOCAL_POINT

_FRACTION = {"type": "number", "minimum": 0, "exclusiveMaximum": 1}

EDITOR_VALUE_SCHEMA: dict[str, Any] = {
    "$id": "iCrop/editor-value.schema.json",
    "type": "object",
    "required": ["src", "focalPoint", "crops"],
    "properties": {
        "src": {"type": "string"},
        "focalPoint": {
            "type": "object",
            "required": ["left", "top"],
            "properties": {
                "left": {"type": "number", "minimum": 0, "maximum": 1},
                "top": {"type": "number", "minimum": 0, "maximum": 1},
            },
            "additionalProperties": False,
        },
        "crops": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["alias", "width", "height"],
                "properties": {
                    "alias": {"type": "string", "minLength": 1},
                    "width": {"type": "number", "exclusiveMinimum": 0},
                    "height": {"type": "number", "exclusiveMinimum": 0},
                    "coordinates": {
                        "type": "object",
                        "required": ["x1", "y1", "x2", "y2"],
                        "properties": {
                            "x1": _FRACTION,
                            "y1": _FRACTION,
                            "x2": _FRACTION,
                            "y2": _FRACTION,
                        },
                        "additionalProperties": False,
                    },
                },
                "additionalProperties": True,
            },
        },
    },
    "additionalProperties": True,
}

DEFAULT_EDITOR_VALUE: dict[str, Any] = {
    "src": "",
    "focalPoint": {"left": DEFAULT_FOCAL_POINT[0], "top": DEFAULT_FOCAL_POINT[1]},
    "crops": [],
}

_validator = Draft202012Validator(EDITOR_VALUE_SCHEMA)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_EDITOR_VALUE` and validate the result."""

    merged = deepcopy(DEFAULT_EDITOR_VALUE)
    if data:
        for key, value in data.items():
            if key == "focalPoint" and value is None:
                continue
            if key == "src" and value is None:
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def iter_errors(data: Any) -> list[str]:
    """Return human readable messages for every schema violation in *data*."""

    messages = []
    for error in sorted(_validator.iter_errors(data), key=lambda err: list(err.absolute_path)):
        location = "/".join(str(part) for part in error.absolute_path) or "<root>"
        messages.append(f"{location}: {error.message}")
    return messages


__all__ = [
    "DEFAULT_EDITOR_VALUE",
    "EDITOR_VALUE_SCHEMA",
    "iter_errors",
    "merge_with_defaults",
]

"""Persisted value of the crop property editor."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from jsonschema import ValidationError

from ..errors import EditorValueError
from .schema import merge_with_defaults
from .types import Crop, FocalPoint


@dataclass
class CropperValue:
    """Image source, shared focal point and the list of crops defined for it."""

    src: str = ""
    focal_point: FocalPoint = field(default_factory=FocalPoint)
    crops: list[Crop] = field(default_factory=list)

    def find(self, alias: str) -> Crop | None:
        for crop in self.crops:
            if crop.alias == alias:
                return crop
        return None

    def index_of(self, alias: str) -> int:
        for index, crop in enumerate(self.crops):
            if crop.alias == alias:
                return index
        return -1

    def copy(self) -> "CropperValue":
        return CropperValue(
            src=self.src,
            focal_point=self.focal_point,
            crops=[crop.copy() for crop in self.crops],
        )

    def to_mapping(self) -> dict[str, Any]:
        return {
            "src": self.src,
            "focalPoint": self.focal_point.as_mapping(),
            "crops": [crop.as_mapping() for crop in self.crops],
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "CropperValue":
        """Validate *data* and build a value; ``None`` yields the defaults."""

        if data is not None and not isinstance(data, Mapping):
            raise EditorValueError(f"Editor value must be an object, got {type(data).__name__}")
        try:
            merged = merge_with_defaults(dict(data) if data else None)
        except ValidationError as exc:
            location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
            raise EditorValueError(f"{location}: {exc.message}") from exc

        for location, number in _numbers(merged):
            if not math.isfinite(number):
                raise EditorValueError(f"{location}: {number!r} is not a finite number")

        crops = [Crop.from_mapping(entry) for entry in merged["crops"]]
        seen: set[str] = set()
        for crop in crops:
            if crop.alias in seen:
                raise EditorValueError(f"Duplicate crop alias: {crop.alias}")
            seen.add(crop.alias)
        return cls(
            src=merged["src"],
            focal_point=FocalPoint.from_mapping(merged["focalPoint"]),
            crops=crops,
        )


def _numbers(merged: Mapping[str, Any]) -> Iterator[tuple[str, float]]:
    """Yield every numeric field of a schema-valid value with its location."""

    for key in ("left", "top"):
        yield f"focalPoint/{key}", float(merged["focalPoint"][key])
    for index, entry in enumerate(merged["crops"]):
        for key in ("width", "height"):
            yield f"crops/{index}/{key}", float(entry[key])
        for key, number in (entry.get("coordinates") or {}).items():
            yield f"crops/{index}/coordinates/{key}", float(number)


__all__ = ["CropperValue"]

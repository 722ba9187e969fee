"""Tests for the persisted editor value and its schema."""

import json

import pytest

from iCrop.errors import EditorValueError
from iCrop.models.editor_value import CropperValue
from iCrop.models.schema import DEFAULT_EDITOR_VALUE, iter_errors, merge_with_defaults
from iCrop.models.types import Crop, FocalPoint, Inset


def _payload(**overrides):
    payload = {
        "src": "/media/photo.jpg",
        "focalPoint": {"left": 0.3, "top": 0.7},
        "crops": [
            {"alias": "desktop", "width": 1920, "height": 1080},
            {
                "alias": "square",
                "width": 1000,
                "height": 1000,
                "coordinates": {"x1": 0.1, "y1": 0.0, "x2": 0.2, "y2": 0.25},
            },
        ],
    }
    payload.update(overrides)
    return payload


def test_from_mapping_builds_crops_and_focal_point():
    value = CropperValue.from_mapping(_payload())

    assert value.src == "/media/photo.jpg"
    assert value.focal_point == FocalPoint(0.3, 0.7)
    assert [crop.alias for crop in value.crops] == ["desktop", "square"]
    assert value.find("desktop").coordinates is None
    assert value.find("square").coordinates == Inset(0.1, 0.0, 0.2, 0.25)
    assert value.index_of("square") == 1
    assert value.index_of("missing") == -1
    assert value.find("missing") is None


def test_mapping_round_trip():
    payload = _payload()
    assert CropperValue.from_mapping(payload).to_mapping() == {
        "src": "/media/photo.jpg",
        "focalPoint": {"left": 0.3, "top": 0.7},
        "crops": payload["crops"],
    }


def test_missing_value_uses_defaults():
    value = CropperValue.from_mapping(None)
    assert value == CropperValue()
    assert value.focal_point == FocalPoint(0.5, 0.5)


def test_null_focal_point_falls_back_to_default():
    value = CropperValue.from_mapping(_payload(focalPoint=None))
    assert value.focal_point == FocalPoint()


def test_merge_with_defaults_does_not_share_state():
    merged = merge_with_defaults(None)
    merged["crops"].append({"alias": "x", "width": 1, "height": 1})
    assert DEFAULT_EDITOR_VALUE["crops"] == []


def test_invalid_coordinates_are_rejected():
    payload = _payload()
    payload["crops"][1]["coordinates"]["x1"] = 1.5
    with pytest.raises(EditorValueError, match="crops/1/coordinates/x1"):
        CropperValue.from_mapping(payload)


def test_non_positive_target_size_is_rejected():
    payload = _payload()
    payload["crops"][0]["height"] = 0
    with pytest.raises(EditorValueError, match="crops/0/height"):
        CropperValue.from_mapping(payload)


def test_duplicate_alias_is_rejected():
    payload = _payload()
    payload["crops"][1]["alias"] = "desktop"
    with pytest.raises(EditorValueError, match="Duplicate crop alias"):
        CropperValue.from_mapping(payload)


def test_non_mapping_value_is_rejected():
    with pytest.raises(EditorValueError):
        CropperValue.from_mapping(["not", "a", "value"])


def test_iter_errors_reports_every_problem():
    messages = iter_errors({"src": 3, "focalPoint": {"left": 2, "top": 0.5}, "crops": []})
    assert any(message.startswith("src:") for message in messages)
    assert any(message.startswith("focalPoint/left:") for message in messages)
    assert iter_errors(_payload()) == []


def test_iter_errors_reports_root_location():
    assert iter_errors([]) == ["<root>: [] is not of type 'object'"]


def test_copy_is_deep_for_crops():
    value = CropperValue(crops=[Crop("a", 1, 1)])
    clone = value.copy()
    clone.crops[0].coordinates = Inset(0.1, 0.1, 0.1, 0.1)
    assert value.crops[0].coordinates is None


def test_nan_focal_point_is_rejected():
    payload = json.loads(
        '{"src": "a", "focalPoint": {"left": NaN, "top": 0.5},'
        ' "crops": [{"alias": "s", "width": 1, "height": 1}]}'
    )
    with pytest.raises(EditorValueError, match="focalPoint/left"):
        CropperValue.from_mapping(payload)


def test_infinite_target_size_is_rejected():
    payload = _payload()
    payload["crops"][0]["width"] = float("inf")
    with pytest.raises(EditorValueError, match="crops/0/width"):
        CropperValue.from_mapping(payload)


def test_nan_coordinates_are_rejected():
    payload = _payload()
    payload["crops"][1]["coordinates"]["y2"] = float("nan")
    with pytest.raises(EditorValueError, match="crops/1/coordinates/y2"):
        CropperValue.from_mapping(payload)

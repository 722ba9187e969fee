"""Tests for the command line interface."""

import json

import pytest
from PIL import Image
from typer.testing import CliRunner

from iCrop.cli import app

runner = CliRunner()
WIDE = {"COLUMNS": "200"}


@pytest.fixture
def value_file(tmp_path):
    path = tmp_path / "value.json"
    path.write_text(
        json.dumps(
            {
                "src": "photo.jpg",
                "focalPoint": {"left": 0.5, "top": 0.5},
                "crops": [
                    {"alias": "desktop", "width": 1920, "height": 1080},
                    {
                        "alias": "square",
                        "width": 1000,
                        "height": 1000,
                        "coordinates": {"x1": 0.0, "y1": 0.0, "x2": 0.5, "y2": 0.5},
                    },
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


def test_layout_prints_mask_and_scale_range():
    result = runner.invoke(
        app,
        ["layout", "--viewport", "800x600", "--crop", "1000x1000", "--image", "2000x1000"],
        env=WIDE,
    )
    assert result.exit_code == 0, result.output
    assert "400.0000" in result.output
    assert "0.400000" in result.output
    assert "1.600000" in result.output


def test_layout_reports_invalid_geometry():
    result = runner.invoke(
        app,
        ["layout", "--viewport", "150x150", "--crop", "1x1", "--image", "10x10"],
        env=WIDE,
    )
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_layout_rejects_malformed_size():
    result = runner.invoke(
        app,
        ["layout", "--viewport", "wide", "--crop", "1x1", "--image", "10x10"],
        env=WIDE,
    )
    assert result.exit_code == 2


def test_size_reads_image_header(tmp_path, qapp):
    path = tmp_path / "image.png"
    Image.new("RGB", (30, 20), "white").save(path)

    result = runner.invoke(app, ["size", str(path)], env=WIDE)

    assert result.exit_code == 0, result.output
    assert "30x20" in result.output


def test_size_of_missing_file_fails(tmp_path):
    result = runner.invoke(app, ["size", str(tmp_path / "missing.png")], env=WIDE)
    assert result.exit_code == 1
    assert "Image not found" in result.output


def test_validate_accepts_value(value_file):
    result = runner.invoke(app, ["validate", str(value_file)], env=WIDE)
    assert result.exit_code == 0, result.output
    assert "is valid" in result.output


def test_validate_lists_problems(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"src": "x", "focalPoint": {"left": 4, "top": 0}, "crops": []}), encoding="utf-8")

    result = runner.invoke(app, ["validate", str(path)], env=WIDE)

    assert result.exit_code == 1
    assert "Invalid value: focalPoint/left" in result.output


def test_validate_rejects_unreadable_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    result = runner.invoke(app, ["validate", str(path)], env=WIDE)
    assert result.exit_code == 1
    assert "Invalid value" in result.output


def test_inspect_rebuilds_every_crop(value_file, qapp):
    result = runner.invoke(app, ["inspect", str(value_file), "--size", "2000x1000"], env=WIDE)

    assert result.exit_code == 0, result.output
    assert "desktop" in result.output
    assert "square" in result.output
    assert "focal point" in result.output
    assert "coordinates" in result.output
    assert "0.3333" in result.output


def test_inspect_needs_an_image_size(value_file):
    result = runner.invoke(app, ["inspect", str(value_file)], env=WIDE)
    assert result.exit_code == 2


def test_inspect_writes_normalised_value(value_file, tmp_path, qapp):
    output = tmp_path / "out" / "normalised.json"

    result = runner.invoke(
        app,
        ["inspect", str(value_file), "--size", "2000x1000", "--output", str(output)],
        env=WIDE,
    )

    assert result.exit_code == 0, result.output
    written = json.loads(output.read_text(encoding="utf-8"))
    desktop, square = written["crops"]
    assert set(desktop["coordinates"]) == {"x1", "y1", "x2", "y2"}
    assert square["coordinates"]["x1"] == pytest.approx(0.0)
    assert square["coordinates"]["y2"] == pytest.approx(0.5)
    assert written["focalPoint"] == {"left": 0.5, "top": 0.5}

import numpy as np
import pytest
from PIL import Image

from raycaster.canvas import Canvas
from raycaster.types import Color, color

# --- Tests for pixel access ---

def test_new_canvas_is_black():
    c = Canvas(10, 20)
    assert c.width == 10 and c.height == 20
    assert c.to_array().shape == (20, 10, 3)
    assert all(c.pixel_at(x, y) == Color.black() for x in range(10) for y in range(20))

def test_write_pixel():
    c = Canvas(10, 20)
    red = color(1, 0, 0)
    c.write_pixel(2, 3, red)
    assert c.pixel_at(2, 3) == red
    assert c.pixel_at(3, 2) == Color.black()

@pytest.mark.parametrize("x, y", [(-1, 0), (10, 0), (0, 20), (10, 20)])
def test_out_of_bounds_access_raises(x, y):
    c = Canvas(10, 20)
    with pytest.raises(IndexError):
        c.write_pixel(x, y, Color.white())
    with pytest.raises(IndexError):
        c.pixel_at(x, y)

def test_rejects_empty_canvas():
    with pytest.raises(ValueError):
        Canvas(0, 5)

def test_to_array_is_a_copy():
    c = Canvas(2, 2)
    arr = c.to_array()
    arr[...] = 1.0
    assert c.pixel_at(0, 0) == Color.black()

# --- Tests for PPM encoding ---

def test_ppm_header():
    lines = Canvas(5, 3).to_ppm().splitlines()
    assert lines[:3] == ["P3", "5 3", "255"]

def test_ppm_pixel_data():
    c = Canvas(5, 3)
    c.write_pixel(0, 0, color(1.5, 0, 0))
    c.write_pixel(2, 1, color(0, 0.5, 0))
    c.write_pixel(4, 2, color(-0.5, 0, 1))
    lines = c.to_ppm().splitlines()
    assert lines[3:6] == [
        "255 0 0 0 0 0 0 0 0 0 0 0 0 0 0",
        "0 0 0 0 0 0 0 128 0 0 0 0 0 0 0",
        "0 0 0 0 0 0 0 0 0 0 0 0 0 0 255",
    ]

def test_ppm_splits_long_lines():
    c = Canvas(10, 2)
    c.fill(color(1, 0.8, 0.6))
    lines = c.to_ppm().splitlines()
    assert lines[3:7] == [
        "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204",
        "153 255 204 153 255 204 153 255 204 153 255 204 153",
        "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204",
        "153 255 204 153 255 204 153 255 204 153 255 204 153",
    ]
    assert all(len(line) <= 70 for line in lines)

def test_ppm_ends_with_newline():
    assert Canvas(5, 3).to_ppm().endswith("\n")

# --- Tests for file output ---

def test_save_ppm(tmp_path):
    c = Canvas(3, 2)
    path = tmp_path / "out.ppm"
    c.save_ppm(path)
    assert path.read_text() == c.to_ppm()

def test_save_png(tmp_path):
    c = Canvas(4, 3)
    c.write_pixel(1, 2, color(1, 0.5, 0))
    path = tmp_path / "out.png"
    c.save_png(path)
    with Image.open(path) as img:
        assert img.size == (4, 3)
        pixels = np.asarray(img.convert("RGB"))
    assert tuple(pixels[2, 1]) == (255, 128, 0)
    assert tuple(pixels[0, 0]) == (0, 0, 0)

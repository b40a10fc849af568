import base64
import io
import re

import pytest
from PIL import Image

from qrsymbol import ValueOutOfRangeError, encode_text
from qrsymbol.renderer import (
    PALETTE,
    classify_modules,
    render_colored_png_from_matrix,
    render_colored_svg_from_matrix,
    render_image,
    render_png,
    to_svg_string,
)
from qrsymbol.tables import num_data_codewords, num_raw_codewords


def test_png_readback(hello_world) -> None:
    png = render_png(hello_world, scale=3, border=2)
    img = Image.open(io.BytesIO(png)).convert("RGB")
    assert img.size == ((21 + 4) * 3,) * 2
    for y in range(-2, 23):
        for x in range(-2, 23):
            pixel = img.getpixel(((x + 2) * 3 + 1, (y + 2) * 3 + 1))
            expected = (0, 0, 0) if hello_world.get_module(x, y) else (255, 255, 255)
            assert pixel == expected


def test_image_colours(hello_world) -> None:
    img = render_image(hello_world, scale=1, border=0, light="#00FF00", dark=(0, 0, 255))
    assert img.mode == "RGB"
    assert img.size == (21, 21)
    assert img.getpixel((0, 0)) == (0, 0, 255)
    assert img.getpixel((7, 0)) == (0, 255, 0)


@pytest.mark.parametrize("scale, border", [(0, 4), (-1, 4), (10, -1)])
def test_invalid_geometry(hello_world, scale: int, border: int) -> None:
    with pytest.raises(ValueOutOfRangeError):
        render_image(hello_world, scale=scale, border=border)


def test_svg_single_path(hello_world) -> None:
    svg = to_svg_string(hello_world, border=4)
    assert svg.count("<path") == 1
    assert 'viewBox="0 0 29 29"' in svg
    squares = re.findall(r"M(\d+),(\d+)h1v1h-1z", svg)
    dark = sum(1 for row in hello_world.modules for v in row if v)
    assert len(squares) == dark
    assert ("4", "4") in squares
    with pytest.raises(ValueOutOfRangeError):
        to_svg_string(hello_world, border=-1)


def test_rendering_does_not_touch_symbol(hello_world) -> None:
    before = hello_world.modules
    render_png(hello_world)
    to_svg_string(hello_world)
    render_colored_png_from_matrix(hello_world)
    assert hello_world.modules == before


@pytest.mark.parametrize("text, ecc", [("HELLO WORLD", "Q"), ("zone classification " * 8, "M")])
def test_classify_modules_counts(text: str, ecc: str) -> None:
    qr = encode_text(text, ecc)
    zones = classify_modules(qr)
    flat = [z for row in zones for z in row]
    assert "" not in flat
    assert flat.count("finder") == 3 * 49
    assert flat.count("dark_module") == 1
    assert flat.count("data") == num_data_codewords(qr.version, qr.ecc) * 8
    data_and_ecc = flat.count("data") + flat.count("ecc")
    assert data_and_ecc == num_raw_codewords(qr.version) * 8
    assert flat.count("format") == 30
    assert flat.count("version") == (36 if qr.version >= 7 else 0)
    assert zones[6][10] == "timing"


def test_colored_png(hello_world) -> None:
    b64, metrics = render_colored_png_from_matrix(hello_world, border=1, scale=2)
    img = Image.open(io.BytesIO(base64.b64decode(b64))).convert("RGB")
    assert img.size == (46, 46)
    # Top-left finder corner drawn in the finder colour
    assert img.getpixel((2, 2)) == PALETTE["finder"]
    assert metrics["version"] == 1
    assert metrics["ecc"] == "Q"
    assert metrics["size"] == 21
    assert metrics["data_modules"] == 13 * 8
    assert metrics["ecc_modules"] == 13 * 8
    assert metrics["functional_modules"] == 441 - 208


def test_colored_svg(hello_world) -> None:
    svg = render_colored_svg_from_matrix(hello_world, border=0, scale=1).decode("utf-8")
    assert svg.startswith("<?xml")
    assert f'fill="rgb{PALETTE["finder"]}"' in svg
    assert svg.rstrip().endswith("</svg>")

# -*- coding: utf-8 -*-
"""
QR Code Renderer Module

Rendering collaborators for finished symbols. They only read a symbol's
size and modules and never modify it.

Functions:
    render_image: Black/white (or two-colour) raster image via Pillow
    render_png: PNG bytes of render_image
    to_svg_string: SVG document with one fused path of dark modules
    classify_modules: Zone name of every module (finder, data, ecc, ...)
    render_colored_png_from_matrix: Colored PNG with zone analysis
    render_colored_svg_from_matrix: Colored SVG with zone analysis
"""

import base64
from io import BytesIO
from typing import Any, Dict, List, Tuple, Union

from PIL import Image, ImageDraw

from .config import DEFAULT_BORDER, DEFAULT_DARK, DEFAULT_LIGHT, DEFAULT_SCALE
from .exceptions import ValueOutOfRangeError
from .functional_areas import build_function_mask, compute_alignment_centers
from .placement import data_module_coords
from .qr_generator import QRSymbol
from .tables import ecc_codewords_per_block, num_data_codewords, num_error_correction_blocks

Color = Union[str, Tuple[int, int, int]]

# Color palette for QR code zone visualization
PALETTE = {
    'background': (255, 255, 255),    # White background
    'finder': (128, 0, 128),          # Purple - Finder patterns (3 corners)
    'separator': (230, 230, 230),     # Light gray - Visual separators
    'timing': (255, 165, 0),          # Orange - Timing patterns (row/col 6)
    'alignment': (0, 128, 128),       # Teal - Alignment patterns
    'format': (255, 0, 0),            # Red - Format information bits
    'version': (180, 0, 0),           # Dark red - Version information (v>=7)
    'dark_module': (90, 0, 90),       # Fixed dark module
    'data': (35, 35, 35),             # Dark gray - Data payload
    'ecc': (20, 90, 160),             # Blue - Error correction codes
    'remainder': (120, 120, 120),     # Gray - Remainder bits after the codewords
}


def _check_geometry(scale: int, border: int) -> None:
    if scale <= 0 or border < 0:
        raise ValueOutOfRangeError("Value out of range")


def render_image(
    symbol: QRSymbol,
    scale: int = DEFAULT_SCALE,
    border: int = DEFAULT_BORDER,
    light: Color = DEFAULT_LIGHT,
    dark: Color = DEFAULT_DARK
) -> Image.Image:
    """
    Rasterize a symbol: each module becomes a scale x scale square.

    Args:
        symbol (QRSymbol): Symbol to draw
        scale (int): Pixels per module (> 0)
        border (int): Quiet zone width in modules (>= 0)
        light (Color): Light module and quiet zone colour
        dark (Color): Dark module colour

    Returns:
        Image.Image: RGB image of (size + 2 * border) * scale pixels square
    """
    _check_geometry(scale, border)
    px = (symbol.size + 2 * border) * scale
    img = Image.new('RGB', (px, px), light)
    draw = ImageDraw.Draw(img)
    for y in range(symbol.size):
        for x in range(symbol.size):
            if symbol.get_module(x, y):
                x0 = (x + border) * scale
                y0 = (y + border) * scale
                draw.rectangle([x0, y0, x0 + scale - 1, y0 + scale - 1], fill=dark)
    return img


def render_png(
    symbol: QRSymbol,
    scale: int = DEFAULT_SCALE,
    border: int = DEFAULT_BORDER,
    light: Color = DEFAULT_LIGHT,
    dark: Color = DEFAULT_DARK
) -> bytes:
    """PNG encoded bytes of render_image()."""
    buf = BytesIO()
    render_image(symbol, scale, border, light, dark).save(buf, format='PNG')
    return buf.getvalue()


def to_svg_string(
    symbol: QRSymbol,
    border: int = DEFAULT_BORDER,
    light: str = DEFAULT_LIGHT,
    dark: str = DEFAULT_DARK
) -> str:
    """
    SVG document drawing all dark modules as a single path of unit squares.

    Example:
        >>> from qrsymbol.qr_generator import encode_text
        >>> to_svg_string(encode_text("A", 'L')).count('<path')
        1
    """
    if border < 0:
        raise ValueOutOfRangeError("Border must be non-negative")
    parts = []
    for y in range(symbol.size):
        for x in range(symbol.size):
            if symbol.get_module(x, y):
                parts.append(f"M{x + border},{y + border}h1v1h-1z")
    dim = symbol.size + border * 2
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" "http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">\n'
        f'<svg xmlns="http://www.w3.org/2000/svg" version="1.1" viewBox="0 0 {dim} {dim}" stroke="none">\n'
        f'\t<rect width="100%" height="100%" fill="{light}"/>\n'
        f'\t<path d="{" ".join(parts)}" fill="{dark}"/>\n'
        '</svg>\n'
    )


def classify_modules(symbol: QRSymbol) -> List[List[str]]:
    """
    Name the zone each module belongs to.

    Zones: 'finder', 'separator', 'timing', 'alignment', 'dark_module',
    'format', 'version', 'data', 'ecc' and 'remainder'. Data and ECC modules
    are exact: the interleaved stream places all data codewords first.
    """
    size = symbol.size
    version = symbol.version
    func_mask, sep_mask = build_function_mask(size, version)
    zones = [[''] * size for _ in range(size)]

    finder_positions = [(0, 0), (0, size - 7), (size - 7, 0)]
    centers = compute_alignment_centers(version)
    alignment = set()
    last = len(centers) - 1
    for i, cy in enumerate(centers):
        for j, cx in enumerate(centers):
            if (i == 0 and j == 0) or (i == 0 and j == last) or (i == last and j == 0):
                continue
            for r in range(cy - 2, cy + 3):
                for c in range(cx - 2, cx + 3):
                    alignment.add((r, c))

    for r in range(size):
        for c in range(size):
            if not func_mask[r][c]:
                continue
            if any(r0 <= r < r0 + 7 and c0 <= c < c0 + 7 for (r0, c0) in finder_positions):
                zones[r][c] = 'finder'
            elif sep_mask[r][c]:
                zones[r][c] = 'separator'
            elif (r, c) in alignment:
                zones[r][c] = 'alignment'
            elif r == 6 or c == 6:
                zones[r][c] = 'timing'
            elif (r, c) == (size - 8, 8):
                zones[r][c] = 'dark_module'
            elif version >= 7 and ((r < 6 and c >= size - 11) or (c < 6 and r >= size - 11)):
                zones[r][c] = 'version'
            else:
                zones[r][c] = 'format'

    data_bits = num_data_codewords(version, symbol.ecc) * 8
    ecc_bits = (ecc_codewords_per_block(version, symbol.ecc)
                * num_error_correction_blocks(version, symbol.ecc) * 8)
    for i, (r, c) in enumerate(data_module_coords(size, func_mask)):
        if i < data_bits:
            zones[r][c] = 'data'
        elif i < data_bits + ecc_bits:
            zones[r][c] = 'ecc'
        else:
            zones[r][c] = 'remainder'
    return zones


def _zone_metrics(symbol: QRSymbol, zones: List[List[str]], border: int) -> Dict[str, Any]:
    counts: Dict[str, int] = {}
    for row in zones:
        for zone in row:
            counts[zone] = counts.get(zone, 0) + 1
    size = symbol.size
    return {
        'size': size,
        'version': symbol.version,
        'ecc': symbol.ecc.letter,
        'mask': symbol.mask,
        'modules': size * size,
        'dark_modules': sum(1 for row in symbol.modules for v in row if v),
        'functional_modules': size * size - counts.get('data', 0) - counts.get('ecc', 0)
                              - counts.get('remainder', 0),
        'data_modules': counts.get('data', 0),
        'ecc_modules': counts.get('ecc', 0),
        'border': border,
    }


def render_colored_png_from_matrix(
    symbol: QRSymbol,
    border: int = DEFAULT_BORDER,
    scale: int = 6
) -> Tuple[str, Dict[str, Any]]:
    """
    Render a symbol as a PNG where each zone has its own color.

    Dark modules take the color of their zone; light modules stay white
    except in the finder separators, which are drawn light gray.

    Args:
        symbol (QRSymbol): Symbol to analyze
        border (int): Quiet zone size in modules
        scale (int): Pixel size per module

    Returns:
        Tuple[str, Dict[str, Any]]: (base64_png, metrics_dict)
    """
    _check_geometry(scale, border)
    zones = classify_modules(symbol)
    size = symbol.size

    img_px = (size + 2 * border) * scale
    img = Image.new('RGB', (img_px, img_px), PALETTE['background'])
    draw = ImageDraw.Draw(img)

    for r in range(size):
        for c in range(size):
            is_dark = symbol.get_module(c, r)
            if not is_dark and zones[r][c] != 'separator':
                continue
            fill = PALETTE[zones[r][c]] if is_dark else PALETTE['separator']
            x0 = (c + border) * scale
            y0 = (r + border) * scale
            draw.rectangle([x0, y0, x0 + scale - 1, y0 + scale - 1], fill=fill)

    buf = BytesIO()
    img.save(buf, format='PNG')
    b64 = base64.b64encode(buf.getvalue()).decode('ascii')
    return b64, _zone_metrics(symbol, zones, border)


def render_colored_svg_from_matrix(
    symbol: QRSymbol,
    border: int = DEFAULT_BORDER,
    scale: int = 10
) -> bytes:
    """
    Render a symbol as an SVG with the same zone coloring as the PNG variant.

    Returns:
        bytes: UTF-8 encoded SVG content
    """
    _check_geometry(scale, border)
    zones = classify_modules(symbol)
    size = symbol.size
    px = (size + 2 * border) * scale

    out = []
    out.append('<?xml version="1.0" encoding="UTF-8"?>')
    out.append(f'<svg xmlns="http://www.w3.org/2000/svg" width="{px}" height="{px}" viewBox="0 0 {px} {px}">')
    out.append(f'<rect width="{px}" height="{px}" fill="rgb{PALETTE["background"]}"/>')

    for r in range(size):
        for c in range(size):
            is_dark = symbol.get_module(c, r)
            if not is_dark and zones[r][c] != 'separator':
                continue
            fill = PALETTE[zones[r][c]] if is_dark else PALETTE['separator']
            x = (c + border) * scale
            y = (r + border) * scale
            out.append(f'<rect x="{x}" y="{y}" width="{scale}" height="{scale}" fill="rgb{fill}"/>')

    out.append('</svg>')
    return "\n".join(out).encode("utf-8")

# -*- coding: utf-8 -*-
"""
QR Symbol - QR Code encoding engine

This package encodes text and binary data into QR Code Model 2 symbols
(versions 1-40) and renders them as raster or vector images.

Modules:
    qr_generator: Encoding pipeline and the QRSymbol type
    segments: Segment modes and segment factories
    segmentation: Minimum-length mixed-mode segmentation
    capacity: Version selection and ECC boosting
    codewords: Data codewords, RS blocks and interleaving
    reed_solomon: GF(256) arithmetic and Reed-Solomon encoder
    functional_areas: Function patterns, format and version information
    placement: Zigzag data placement
    masking: Mask patterns and mask selection
    penalties: Mask pattern evaluation algorithms
    renderer: PNG / SVG rendering and zone coloring
    config: Defaults and option normalisation
"""

__version__ = "1.0.0"
__author__ = "QR Generator Advanced Team"

from .exceptions import (
    CapacityOverflowError,
    DataTooLongError,
    InvalidCharacterError,
    QRCodeError,
    ValueOutOfRangeError,
)
from .tables import Ecc
from .segments import (
    Mode,
    Segment,
    make_alphanumeric,
    make_bytes,
    make_eci,
    make_kanji,
    make_numeric,
    make_segments,
)
from .segmentation import make_segments_optimally
from .qr_generator import (
    QRSymbol,
    encode_binary,
    encode_segments,
    encode_text,
    evaluate_all_masks,
    make_qr,
)
from .renderer import (
    render_colored_png_from_matrix,
    render_colored_svg_from_matrix,
    render_image,
    render_png,
    to_svg_string,
)
from .functional_areas import build_function_mask, compute_alignment_centers
from .penalties import compute_mask_penalty

__all__ = [
    'QRCodeError',
    'InvalidCharacterError',
    'ValueOutOfRangeError',
    'DataTooLongError',
    'CapacityOverflowError',
    'Ecc',
    'Mode',
    'Segment',
    'make_numeric',
    'make_alphanumeric',
    'make_bytes',
    'make_kanji',
    'make_eci',
    'make_segments',
    'make_segments_optimally',
    'QRSymbol',
    'encode_text',
    'encode_binary',
    'encode_segments',
    'make_qr',
    'evaluate_all_masks',
    'render_image',
    'render_png',
    'to_svg_string',
    'render_colored_png_from_matrix',
    'render_colored_svg_from_matrix',
    'build_function_mask',
    'compute_alignment_centers',
    'compute_mask_penalty',
]

# -*- coding: utf-8 -*-
"""
Configuration Module

Default values and normalisation of the loosely typed options accepted by
make_qr and by callers that receive parameters as strings (web forms, query
strings, environment). Values such as 'auto', 'M' or 'true' are turned into
the typed options the encoder works with.

Classes:
    EncodeOptions: Normalised encoding and rendering options
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from .exceptions import ValueOutOfRangeError
from .tables import MAX_VERSION, MIN_VERSION, Ecc

DEFAULT_ECC = "M"
DEFAULT_MODE = "auto"
DEFAULT_BORDER = 4
MAX_BORDER = 20
DEFAULT_SCALE = 10
DEFAULT_LIGHT = "#FFFFFF"
DEFAULT_DARK = "#000000"

# 'auto': single best-guess mode, 'optimal': minimum length mixed segments
MODES = ("auto", "optimal", "numeric", "alphanumeric", "byte", "kanji")

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


def normalize_version(version: Union[int, str, None]) -> Optional[int]:
    """None or 'auto' -> None (smallest fitting version), otherwise 1..40."""
    if version is None or (isinstance(version, str) and version.strip().lower() in ("", "auto")):
        return None
    value = int(version)
    if not MIN_VERSION <= value <= MAX_VERSION:
        raise ValueOutOfRangeError(f"Version number out of range: {value}")
    return value


def normalize_mask(mask: Union[int, str, None]) -> int:
    """None or 'auto' -> -1 (automatic), otherwise the mask id as int."""
    if mask is None or (isinstance(mask, str) and mask.strip().lower() in ("", "auto")):
        return -1
    return int(mask)


def normalize_mode(mode: Optional[str]) -> str:
    value = (mode or DEFAULT_MODE).strip().lower()
    if value not in MODES:
        raise ValueError(f"Unknown mode: {mode!r}, expected one of {', '.join(MODES)}")
    return value


def parse_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"Not a boolean value: {value!r}")


def parse_border(value: Any) -> int:
    """Quiet zone width; invalid or out of range values fall back to the default."""
    try:
        border = int(value if value not in (None, "") else DEFAULT_BORDER)
    except (ValueError, TypeError):
        return DEFAULT_BORDER
    if border < 0 or border > MAX_BORDER:
        return DEFAULT_BORDER
    return border


@dataclass(frozen=True)
class EncodeOptions:
    """
    Normalised options for make_qr plus the rendering border.

    Example:
        >>> opts = EncodeOptions.from_mapping({'ecc': 'q', 'version': 'auto', 'mask': '3'})
        >>> opts.ecc, opts.version, opts.mask
        (<Ecc.QUARTILE: (2, 3)>, None, 3)
    """

    ecc: Ecc = Ecc.MEDIUM
    version: Optional[int] = None
    mode: str = DEFAULT_MODE
    mask: int = -1
    boost_error: bool = False
    eci: Optional[int] = None
    border: int = DEFAULT_BORDER

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> "EncodeOptions":
        """
        Build options from a mapping of (usually string) parameters.

        Missing keys take the defaults. 'version' and 'mask' accept 'auto';
        'border' outside 0..20 falls back to 4.
        """
        eci = params.get("eci")
        return cls(
            ecc=Ecc.parse(params.get("ecc") or DEFAULT_ECC),
            version=normalize_version(params.get("version")),
            mode=normalize_mode(params.get("mode")),
            mask=normalize_mask(params.get("mask")),
            boost_error=parse_bool(params.get("boost_error")),
            eci=None if eci in (None, "") else int(eci),
            border=parse_border(params.get("border")),
        )

    def as_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for make_qr (the border is a rendering option)."""
        return {
            "ecc": self.ecc,
            "version": self.version,
            "mode": self.mode,
            "mask": self.mask,
            "boost_error": self.boost_error,
            "eci": self.eci,
        }

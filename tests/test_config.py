import pytest

from qrsymbol import Ecc, ValueOutOfRangeError, make_qr
from qrsymbol.config import (
    DEFAULT_BORDER,
    EncodeOptions,
    normalize_mask,
    normalize_mode,
    normalize_version,
    parse_bool,
    parse_border,
)


@pytest.mark.parametrize("value, expected", [(None, None), ("auto", None), (" AUTO ", None), ("", None), ("7", 7), (40, 40)])
def test_normalize_version(value, expected) -> None:
    assert normalize_version(value) == expected


@pytest.mark.parametrize("value", [0, "41", -3])
def test_normalize_version_out_of_range(value) -> None:
    with pytest.raises(ValueOutOfRangeError):
        normalize_version(value)


def test_normalize_mask() -> None:
    assert normalize_mask(None) == -1
    assert normalize_mask("auto") == -1
    assert normalize_mask("3") == 3
    assert normalize_mask(0) == 0


def test_normalize_mode() -> None:
    assert normalize_mode(None) == "auto"
    assert normalize_mode("Optimal") == "optimal"
    with pytest.raises(ValueError):
        normalize_mode("binary")


@pytest.mark.parametrize("value, expected", [("true", True), ("ON", True), ("0", False), ("", False), (None, False), (True, True)])
def test_parse_bool(value, expected) -> None:
    assert parse_bool(value) is expected


def test_parse_bool_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        parse_bool("maybe")


@pytest.mark.parametrize("value, expected", [("2", 2), (0, 0), ("20", 20), ("21", DEFAULT_BORDER), ("-1", DEFAULT_BORDER), ("wide", DEFAULT_BORDER), (None, DEFAULT_BORDER)])
def test_parse_border(value, expected) -> None:
    assert parse_border(value) == expected


def test_options_from_form_params() -> None:
    opts = EncodeOptions.from_mapping({
        "ecc": "H",
        "version": "3",
        "mode": "byte",
        "mask": "auto",
        "boost_error": "false",
        "eci": "26",
        "border": "2",
    })
    assert opts == EncodeOptions(ecc=Ecc.HIGH, version=3, mode="byte", mask=-1,
                                 boost_error=False, eci=26, border=2)


def test_options_defaults() -> None:
    opts = EncodeOptions.from_mapping({})
    assert opts == EncodeOptions()
    assert opts.ecc is Ecc.MEDIUM


def test_options_feed_make_qr() -> None:
    opts = EncodeOptions.from_mapping({"ecc": "Q", "version": "2", "mask": "1"})
    qr = make_qr("OPTIONS", **opts.as_kwargs())
    assert (qr.version, qr.ecc, qr.mask) == (2, Ecc.QUARTILE, 1)

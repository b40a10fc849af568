# -*- coding: utf-8 -*-
"""
QR Symbol Exceptions Module

All errors raised by the encoder derive from QRCodeError. Every concrete
error is also a ValueError so callers that only know about the builtin
hierarchy keep working.

Classes:
    QRCodeError: Base class of the package errors
    InvalidCharacterError: Text contains characters outside a mode's alphabet
    ValueOutOfRangeError: Numeric parameter outside its legal domain
    DataTooLongError: No allowed version/ECC level can hold the data
    CapacityOverflowError: Bit length arithmetic overflowed (a DataTooLongError)
"""


class QRCodeError(Exception):
    """Base exception for the qrsymbol package"""


class InvalidCharacterError(QRCodeError, ValueError):
    """Raised when input text cannot be represented in the requested mode"""


class ValueOutOfRangeError(QRCodeError, ValueError):
    """Raised when a numeric argument is outside its legal domain"""


class DataTooLongError(QRCodeError, ValueError):
    """
    Raised when the segments do not fit any version in the requested range.

    This is an expected outcome for oversized input. Callers may retry with
    a lower ECC level, a wider version range or shorter data.
    """


class CapacityOverflowError(DataTooLongError):
    """Raised when a bit length would exceed the maximum representable length"""

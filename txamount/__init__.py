"""
txamount

Float-backed monetary amounts compared, displayed and serialized
at four decimal digits of precision.
"""

from .amount import Amount, ParseError, PRECISION_DIGITS, EQUALITY_TOLERANCE

__version__ = "1.0.0"

__all__ = ["Amount", "ParseError", "PRECISION_DIGITS", "EQUALITY_TOLERANCE"]

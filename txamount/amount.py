"""
Amount Value Type Module

Monetary amounts backed by a float and kept to 4 digit precision at the
boundaries: equality, display and text serialization. The raw value is
stored unchanged and every arithmetic operation works on it at full
precision.

Equality is tolerance based (two amounts are the same when they match
within 4 digits of precision) while ordering compares the raw values:

    >>> Amount(1.00001) == Amount(1.0)
    True
    >>> Amount(1.0) < Amount(1.00001)
    True

Tolerance based equality is not transitive and amounts are therefore not
hashable.
"""

from dataclasses import dataclass
from numbers import Real
from typing import Any, Optional, Union
import math
import re

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from .config import get_config
from .logging_config import get_logger, log_action


PRECISION_DIGITS = 4
EQUALITY_TOLERANCE = 0.0001

# Decimal float literal: optional sign, digits with an optional point (or a
# leading point), optional exponent. No whitespace, underscores or separators.
_FLOAT_LITERAL = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE | re.ASCII,
)

logger = get_logger("txamount.amount")


class ParseError(ValueError):
    """Raised when text cannot be read as an amount"""

    def __init__(self, text: Any):
        super().__init__(f"Cannot parse {text!r} as an amount")
        self.text = text


def _raw_value(other: Any) -> Optional[float]:
    """Raw float behind an Amount or a plain real number, None otherwise"""
    if isinstance(other, Amount):
        return other.value
    if isinstance(other, Real):
        return float(other)
    return None


@dataclass(frozen=True, eq=False)
class Amount:
    """
    Immutable monetary amount.

    The float is stored as given. Compound assignment (``+=``, ``-=``)
    rebinds to a new Amount holding the full precision result, so holders
    never share a mutable value.
    """
    value: float

    # Tolerance based equality cannot be hashed consistently
    __hash__ = None

    def __post_init__(self):
        if not isinstance(self.value, float):
            object.__setattr__(self, 'value', float(self.value))

    @classmethod
    def new(cls, value: Union[float, int]) -> 'Amount':
        """Wrap a raw number, no rounding or validation"""
        return cls(value)

    @classmethod
    def zero(cls) -> 'Amount':
        return cls(0.0)

    @classmethod
    def parse(cls, text: str) -> 'Amount':
        """
        Parse a decimal float literal such as "10.25", "-.5" or "1e-3".

        The parsed value is kept unchanged. "inf", "infinity" and "nan" are
        accepted like any float parser would; their precision semantics are
        undefined.

        Raises:
            ParseError: If text is not a valid float literal
        """
        if not isinstance(text, str) or not _FLOAT_LITERAL.fullmatch(text):
            raise ParseError(text)

        value = float(text)
        if not math.isfinite(value) and get_config().warn_on_non_finite:
            log_action(
                logger, "warning", f"Parsed non-finite amount: {text}",
                action="parse_amount", extra={"input": text}
            )
        return cls(value)

    def with_value(self, value: Union[float, int]) -> 'Amount':
        """Return an amount holding value in place of this one"""
        return Amount(value)

    def __float__(self) -> float:
        return self.value

    def __add__(self, other: Union['Amount', float]) -> 'Amount':
        other_value = _raw_value(other)
        if other_value is None:
            return NotImplemented
        return Amount(self.value + other_value)

    def __radd__(self, other: float) -> 'Amount':
        # sum() starts from 0
        return self.__add__(other)

    def __sub__(self, other: Union['Amount', float]) -> 'Amount':
        other_value = _raw_value(other)
        if other_value is None:
            return NotImplemented
        return Amount(self.value - other_value)

    def __rsub__(self, other: float) -> 'Amount':
        other_value = _raw_value(other)
        if other_value is None:
            return NotImplemented
        return Amount(other_value - self.value)

    def __neg__(self) -> 'Amount':
        return Amount(-self.value)

    def __abs__(self) -> 'Amount':
        return Amount(abs(self.value))

    def is_close(self, other: Union['Amount', float]) -> bool:
        """True if both values match within 4 digits of precision"""
        other_value = _raw_value(other)
        if other_value is None:
            raise TypeError(f"Cannot compare Amount with {type(other).__name__}")
        return abs(self.value - other_value) < EQUALITY_TOLERANCE

    def __eq__(self, other) -> bool:
        if _raw_value(other) is None:
            return NotImplemented
        return self.is_close(other)

    # Ordering uses the raw values, not the equality tolerance

    def __lt__(self, other: Union['Amount', float]) -> bool:
        other_value = _raw_value(other)
        if other_value is None:
            return NotImplemented
        return self.value < other_value

    def __le__(self, other: Union['Amount', float]) -> bool:
        other_value = _raw_value(other)
        if other_value is None:
            return NotImplemented
        return self.value <= other_value

    def __gt__(self, other: Union['Amount', float]) -> bool:
        other_value = _raw_value(other)
        if other_value is None:
            return NotImplemented
        return self.value > other_value

    def __ge__(self, other: Union['Amount', float]) -> bool:
        other_value = _raw_value(other)
        if other_value is None:
            return NotImplemented
        return self.value >= other_value

    def __str__(self) -> str:
        return f"{self.value:.{PRECISION_DIGITS}f}"

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        return format(self.value, format_spec)

    def to_json(self) -> str:
        """Serialized form: the 4 digit string, never a JSON number"""
        return str(self)

    @classmethod
    def _validate(cls, value: Any) -> 'Amount':
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, Real) and not isinstance(value, bool):
            return cls(value)
        raise ValueError(f"Cannot convert {type(value).__name__} to Amount")

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any,
                                     handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls.to_json,
                return_schema=core_schema.str_schema(),
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(cls, schema: core_schema.CoreSchema,
                                     handler: GetJsonSchemaHandler) -> JsonSchemaValue:
        return {"type": "string", "examples": ["10.0012"]}

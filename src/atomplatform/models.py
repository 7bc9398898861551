"""Record types shared by the provider clients."""
from __future__ import annotations

from typing import Annotated, Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, NonNegativeInt

T = TypeVar("T")


def _coerce_id(value: Any, missing: Any) -> Any:
    """Accept an identifier sent either as a JSON number or a JSON string.

    Unsigned decimal strings (one leading ``+`` allowed) become ints; any
    other string (``"default"``, ``"-7"``) becomes ``missing``. Other values
    are left for pydantic to validate, which rejects negative numbers.
    """
    if isinstance(value, str):
        digits = value[1:] if value.startswith("+") else value
        if digits.isascii() and digits.isdigit():
            return int(digits)
        return missing
    return value


def _required_id(value: Any) -> Any:
    return _coerce_id(value, 0)


def _optional_id(value: Any) -> Any:
    return _coerce_id(value, None)


# Identifier that may arrive as number or string; unparseable strings map to 0
FlexibleId = Annotated[NonNegativeInt, BeforeValidator(_required_id)]

# Same as FlexibleId, but null and unparseable strings map to None
OptionalFlexibleId = Annotated[Optional[NonNegativeInt], BeforeValidator(_optional_id)]


class APIModel(BaseModel):
    """Base for response records: unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RequestModel(BaseModel):
    """Base for request bodies.

    Fields left as ``None`` are dropped from the payload entirely so the
    remote side keeps its current value; zero and empty values are sent.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to a JSON-ready dict using wire names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Money(APIModel):
    """Monetary amount as minor units plus divisor.

    ``amount=1999, divisor=100`` is 19.99. No floating point is involved.
    """

    amount: int
    divisor: int = Field(gt=0)
    currency_code: str

    @property
    def whole(self) -> int:
        """Integer part, truncated toward zero."""
        quotient = abs(self.amount) // self.divisor
        return -quotient if self.amount < 0 else quotient

    @property
    def fraction(self) -> int:
        """Remainder in minor units, carrying the sign of ``amount``."""
        return self.amount - self.whole * self.divisor

    def display(self) -> str:
        """Human form, e.g. ``"19.99 USD"``."""
        sign = "-" if self.amount < 0 else ""
        whole = abs(self.whole)
        if self.divisor == 1:
            return f"{sign}{whole} {self.currency_code}"
        width = len(str(self.divisor - 1))
        return f"{sign}{whole}.{abs(self.fraction):0{width}d} {self.currency_code}"


class Page(APIModel, Generic[T]):
    """Offset/limit paginated collection."""

    count: int
    results: List[T]


__all__ = [
    "APIModel",
    "RequestModel",
    "Money",
    "Page",
    "FlexibleId",
    "OptionalFlexibleId",
]

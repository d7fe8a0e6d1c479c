"""
namapp/schemas/records.py
Typed views of the documents the stats aggregator reads.

Firestore hands back loosely typed dicts (numbers stored as strings, missing
fields, nulls). Every source is parsed into one of these models at the store
boundary so the reduction code only ever sees clean values.
"""
import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


def coerce_number(value: Any) -> float:
    """Numeric value of `value`, or 0 for anything missing, non-numeric or non-finite."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


class _Record(BaseModel):
    # Documents carry many more fields than the aggregator needs
    model_config = ConfigDict(extra="ignore", frozen=True)


class StatusRecord(_Record):
    status: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _status_text(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None


class AppRecord(StatusRecord):
    downloads: int = 0

    @field_validator("downloads", mode="before")
    @classmethod
    def _downloads(cls, v: Any) -> int:
        return int(coerce_number(v))


class ProductRecord(StatusRecord):
    pass


class OrderRecord(StatusRecord):
    total_amount: float = 0

    @field_validator("total_amount", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> float:
        return coerce_number(v)


class RatingRecord(_Record):
    rating: float = 0

    @field_validator("rating", mode="before")
    @classmethod
    def _rating(cls, v: Any) -> float:
        return coerce_number(v)


class BookingRecord(StatusRecord):
    pass

from __future__ import annotations

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any

_CENTS = Decimal("0.01")


def money(value: Decimal) -> str:
    """Decimal -> '1234.50' (two places, half-up)."""
    return str(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))


def as_json(value: Any) -> Any:
    """Convert dataclasses/Decimal/date/Enum trees into JSON-friendly values.

    Properties are not included; callers add derived fields explicitly.
    """
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: as_json(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return money(value)
    if isinstance(value, datetime):
        return value.isoformat(timespec="seconds")
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, dict):
        return {str(k): as_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [as_json(v) for v in value]
    return value

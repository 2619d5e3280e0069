from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} inválido")
    return value.strip()


def require_positive_amount(value, field_name: str = "Valor") -> Decimal:
    try:
        amount = Decimal(str(value).strip().replace(",", "."))
    except (InvalidOperation, AttributeError):
        raise ValidationError(f"{field_name} inválido")
    if not amount.is_finite() or amount <= 0:
        raise ValidationError(f"{field_name} deve ser maior que zero")
    return amount


def require_period(start: Optional[date], end: Optional[date]) -> tuple[date, date]:
    if not start or not end:
        raise ValidationError("Por favor, selecione o período para gerar o relatório")
    if start > end:
        raise ValidationError("A data de início não pode ser posterior à data de fim")
    return start, end

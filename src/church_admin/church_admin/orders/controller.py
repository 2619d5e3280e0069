from __future__ import annotations

from decimal import Decimal, InvalidOperation

from flask import Flask, jsonify, request

from ..common.serialization import as_json
from ..common.web import json_endpoint, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from .discounts import calculate_discount
from .model import CartItem


def _decimal(value, field_name: str) -> Decimal:
    try:
        result = Decimal(str(value if value not in (None, "") else 0).replace(",", "."))
    except InvalidOperation:
        raise ValidationError(f"{field_name} inválido")
    if not result.is_finite() or result < 0:
        raise ValidationError(f"{field_name} inválido")
    return result


def parse_items(raw) -> list[CartItem]:
    if not isinstance(raw, list) or not raw:
        raise ValidationError("Adicione ao menos um item ao pedido")
    items = []
    for entry in raw:
        if not isinstance(entry, dict):
            raise ValidationError("Item inválido")
        try:
            quantity = int(entry.get("quantity", 1))
        except (TypeError, ValueError):
            raise ValidationError("Quantidade inválida")
        if quantity < 1:
            raise ValidationError("Quantidade inválida")
        items.append(
            CartItem(
                item_id=str(entry.get("id", "")),
                title=str(entry.get("title", "")),
                unit_price=_decimal(entry.get("unit_price"), "Preço"),
                quantity=quantity,
                category=entry.get("category"),
                gross_weight=_decimal(entry.get("gross_weight"), "Peso"),
            )
        )
    return items


def register(app: Flask, container: Container) -> None:
    @app.route("/api/orders/quote", methods=["POST"], endpoint="orders_quote")
    @login_required
    @json_endpoint
    def orders_quote():
        data = request.get_json(silent=True) or {}
        quote = calculate_discount(
            parse_items(data.get("items")),
            client_type=data.get("client_type"),
            onboarding_done=bool(data.get("onboarding_done")),
            salesperson_discount=_decimal(data.get("salesperson_discount"), "Desconto do vendedor"),
            category_discounts={
                str(k): _decimal(v, "Desconto por categoria") for k, v in (data.get("category_discounts") or {}).items()
            },
        )
        return jsonify({"quote": as_json(quote)})

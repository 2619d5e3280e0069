from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serialization import as_json
from ..common.web import current_church_id, date_arg, json_endpoint, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/bank-accounts", methods=["GET"], endpoint="bank_accounts")
    @login_required
    @json_endpoint
    def bank_accounts():
        accounts = container.bank_account_service.list_accounts(church_id=current_church_id())
        return jsonify({"accounts": as_json(list(accounts))})

    @app.route("/api/bank-accounts", methods=["POST"], endpoint="bank_accounts_create")
    @login_required
    @json_endpoint
    def bank_accounts_create():
        data = request.get_json(silent=True) or {}
        result = container.bank_account_service.open_account(
            church_id=current_church_id(),
            bank_name=data.get("bank_name", ""),
            agency=data.get("agency", ""),
            account_number=data.get("account_number", ""),
            account_type=data.get("account_type", ""),
            initial_balance=data.get("initial_balance"),
            initial_balance_date=date_arg("initial_balance_date", data),
        )
        return jsonify(result.to_dict()), 201

    @app.route("/api/transfers", methods=["GET"], endpoint="transfers")
    @login_required
    @json_endpoint
    def transfers():
        items = container.transfer_service.list_transfers(church_id=current_church_id())
        return jsonify({"transfers": as_json(items)})

    @app.route("/api/transfers", methods=["POST"], endpoint="transfers_create")
    @login_required
    @json_endpoint
    def transfers_create():
        data = request.get_json(silent=True) or {}
        entry_id = container.transfer_service.transfer(
            church_id=current_church_id(),
            from_account=data.get("from_account", ""),
            to_account=data.get("to_account", ""),
            amount=data.get("amount"),
            transfer_date=date_arg("date", data),
            description=data.get("description"),
        )
        return jsonify({"id": entry_id, "message": "A transferência foi registrada com sucesso."}), 201

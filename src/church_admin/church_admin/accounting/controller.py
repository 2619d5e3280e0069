from __future__ import annotations

from flask import Flask, Response, jsonify, request

from ..common.serialization import as_json, money
from ..common.web import current_church_id, date_arg, json_endpoint, login_required
from ..core.enums import JournalKind
from ..core.exceptions import ValidationError
from ..container import Container


def _journal_kind(value: str | None) -> JournalKind:
    try:
        return JournalKind(value or JournalKind.ALL.value)
    except ValueError:
        raise ValidationError("Tipo de lançamento inválido")


def register(app: Flask, container: Container) -> None:
    reports = container.accounting_report_service

    @app.route("/api/reports/trial-balance", methods=["GET"], endpoint="trial_balance")
    @login_required
    @json_endpoint
    def trial_balance():
        report = reports.trial_balance(
            church_id=current_church_id(),
            start=date_arg("start"),
            end=date_arg("end"),
        )
        payload = as_json(report)
        payload["message"] = (
            "Balancete consistente: Débitos = Créditos"
            if report.is_consistent
            else "Balancete inconsistente: Débitos ≠ Créditos"
        )
        return jsonify(payload)

    @app.route("/api/reports/balance-sheet", methods=["GET"], endpoint="balance_sheet")
    @login_required
    @json_endpoint
    def balance_sheet():
        report = reports.balance_sheet(church_id=current_church_id(), as_of=date_arg("date"))
        payload = as_json(report)
        payload["total_liabilities_and_equity"] = money(report.total_liabilities_and_equity)
        return jsonify(payload)

    @app.route("/api/reports/income-statement", methods=["GET"], endpoint="income_statement")
    @login_required
    @json_endpoint
    def income_statement():
        report = reports.income_statement(
            church_id=current_church_id(),
            start=date_arg("start"),
            end=date_arg("end"),
        )
        payload = as_json(report)
        payload["is_surplus"] = report.is_surplus
        payload["result_label"] = report.result_label
        return jsonify(payload)

    def _journal_kwargs() -> dict:
        return dict(
            church_id=current_church_id(),
            start=date_arg("start"),
            end=date_arg("end"),
            account_code=(request.args.get("account") or "").strip() or None,
            kind=_journal_kind(request.args.get("type")),
        )

    @app.route("/api/reports/journal", methods=["GET"], endpoint="journal")
    @login_required
    @json_endpoint
    def journal():
        book = reports.journal(**_journal_kwargs())
        payload = as_json(book)
        payload["total"] = money(book.total)
        return jsonify(payload)

    @app.route("/api/reports/journal.csv", methods=["GET"], endpoint="journal_csv")
    @login_required
    @json_endpoint
    def journal_csv():
        kwargs = _journal_kwargs()
        body = reports.journal_csv(**kwargs)
        filename = f"livro_diario_{kwargs['start']:%Y-%m-%d}_{kwargs['end']:%Y-%m-%d}.csv"
        return Response(
            body,
            mimetype="text/csv; charset=utf-8",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

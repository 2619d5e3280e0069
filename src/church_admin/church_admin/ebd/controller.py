from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..common.serialization import as_json
from ..common.web import admin_required, current_church_id, date_arg, json_endpoint, login_required
from ..container import Container
from ..core.exceptions import ValidationError


def _int_or_none(value, field_name: str):
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} inválido")


def _lesson_number(value) -> int:
    number = _int_or_none(value, "Número da lição")
    if number is None:
        raise ValidationError("Número da lição inválido")
    return number


def _assignments(raw) -> dict[int, int]:
    """{"1": 7, "2": 9} -> {1: 7, 2: 9}; empty values are dropped."""
    if raw in (None, ""):
        return {}
    if not isinstance(raw, dict):
        raise ValidationError("Escala inválida")
    out: dict[int, int] = {}
    for key, value in raw.items():
        teacher_id = _int_or_none(value, "Professor")
        if teacher_id:
            out[_lesson_number(key)] = teacher_id
    return out


def _no_class(raw) -> list[int]:
    if raw in (None, ""):
        return []
    if not isinstance(raw, list):
        raise ValidationError("Lista de dias sem aula inválida")
    return [_lesson_number(n) for n in raw]


def register(app: Flask, container: Container) -> None:
    @app.route("/api/ebd/plans/preview", methods=["GET"], endpoint="ebd_plan_preview")
    @login_required
    @json_endpoint
    def ebd_plan_preview():
        slots = container.lesson_plan_service.preview(
            magazine_id=_int_or_none(request.args.get("magazine_id"), "Revista"),
            start=date_arg("start"),
            weekday=request.args.get("weekday", ""),
        )
        return jsonify({"lessons": as_json(slots)})

    @app.route("/api/ebd/plans", methods=["POST"], endpoint="ebd_plan_create")
    @login_required
    @json_endpoint
    def ebd_plan_create():
        data = request.get_json(silent=True) or {}
        magazine_id = _int_or_none(data.get("magazine_id"), "Revista")
        if magazine_id is None:
            raise ValidationError("Selecione uma revista")
        plan_id = container.lesson_plan_service.create_plan(
            church_id=current_church_id(),
            magazine_id=magazine_id,
            class_id=_int_or_none(data.get("class_id"), "Turma"),
            start=date_arg("start", data),
            weekday=data.get("weekday", ""),
            assignments=_assignments(data.get("assignments")),
            no_class=_no_class(data.get("no_class")),
        )
        return jsonify({"id": plan_id, "message": "Planejamento salvo com sucesso."}), 201

    @app.route("/api/ebd/plans/<int:plan_id>/progress", methods=["GET"], endpoint="ebd_plan_progress")
    @login_required
    @json_endpoint
    def ebd_plan_progress(plan_id: int):
        progress, rota = container.lesson_plan_service.progress(
            church_id=current_church_id(), plan_id=plan_id, today=today_local()
        )
        return jsonify(
            {
                "progress": {**as_json(progress), "remaining": progress.remaining},
                "teachers": as_json(rota),
            }
        )

    @app.route("/api/ebd/remaining", methods=["GET"], endpoint="ebd_remaining")
    @admin_required
    @json_endpoint
    def ebd_remaining():
        church_ids = [c for c in request.args.get("churches", "").split(",") if c.strip()]
        groups = container.lesson_plan_service.remaining_for_churches(
            church_ids=[c.strip() for c in church_ids], today=today_local()
        )
        return jsonify(as_json(groups))

from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import json_endpoint, login_required
from ..container import Container
from .model import SessionUser
from .resolver import landing_path


def session_user() -> SessionUser:
    return SessionUser(
        user_id=int(session["user_id"]),
        email=session.get("email") or "",
        role=session.get("role"),
        church_id=session.get("church_id"),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/me/landing", methods=["GET"], endpoint="me_landing")
    @login_required
    @json_endpoint
    def me_landing():
        user = session_user()
        kind = container.redirect_service.kind_for(user)
        return jsonify({"kind": kind.value, "path": landing_path(kind)})

    @app.route("/api/me/modules", methods=["GET"], endpoint="me_modules")
    @login_required
    @json_endpoint
    def me_modules():
        return jsonify({"modules": container.module_service.active_modules(session_user())})

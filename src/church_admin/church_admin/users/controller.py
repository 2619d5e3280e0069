from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..access.resolver import landing_path
from ..common.logging_utils import get_logger
from ..common.web import json_endpoint
from ..container import Container

logger = get_logger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    @json_endpoint
    def login():
        data = request.get_json(silent=True) or request.form
        user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=7)
        session["user_id"] = user.user_id
        session["name"] = user.full_name
        session["email"] = user.email
        session["role"] = user.role
        session["church_id"] = user.church_id

        kind = container.redirect_service.kind_for(container.auth_service.session_user(user))
        logger.info("login user=%s landing=%s", user.user_id, kind.value)
        return jsonify({"message": "Login realizado com sucesso!", "redirect": landing_path(kind)})

    @app.route("/logout", methods=["POST", "GET"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"message": "Sessão encerrada."})

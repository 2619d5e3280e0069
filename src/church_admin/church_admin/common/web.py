"""Flask helpers shared by the controllers (auth guards + error mapping)."""
from __future__ import annotations

from datetime import date
from functools import wraps
from typing import Optional

from flask import current_app, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from .datetime_utils import parse_iso_date
from .logging_utils import get_logger

logger = get_logger(__name__)

_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ValidationError, 400),
    (DomainError, 400),
)


def error_response(message: str, status: int):
    return jsonify({"error": message}), status


def domain_error_status(exc: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(exc, cls):
            return status
    return 400


def json_endpoint(view):
    """Translate domain errors into JSON responses; log anything unexpected."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return error_response(str(e), domain_error_status(e))
        except Exception:
            logger.exception("unexpected error in %s", request.path)
            if current_app.config.get("DEBUG"):
                raise
            return error_response("Erro interno do sistema", 500)

    return wrapper


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Por favor, faça login para continuar", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Por favor, faça login para continuar", 401)
        if session.get("role") != Role.ADMIN.value:
            return error_response("Você não tem permissão", 403)
        return view(*args, **kwargs)

    return wrapper


def current_church_id() -> Optional[str]:
    church_id = session.get("church_id")
    return str(church_id) if church_id else None


def date_arg(name: str, source: Optional[dict] = None) -> Optional[date]:
    raw = (source if source is not None else request.args).get(name)
    if not raw:
        return None
    try:
        return parse_iso_date(str(raw))
    except ValueError:
        raise ValidationError(f"Data inválida: {name} (AAAA-MM-DD)")

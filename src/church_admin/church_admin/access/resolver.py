"""Decide where a user lands after login.

Rules are checked in order and the first match wins, so a user who is both
teacher and student lands on the teacher area.
"""
from __future__ import annotations

from typing import Callable, Optional

from ..core.enums import Module, Role, UserKind
from .model import RoleSignals

RESELLER_CLIENT_TYPE = "REVENDEDOR"

_FINANCE_ROLES = {Role.TREASURER.value, Role.SECRETARY.value}

_Rule = tuple[Callable[[RoleSignals], bool], UserKind]

# Decided by the session role alone, before any lookup.
_SESSION_RULES: tuple[_Rule, ...] = (
    (lambda s: s.role == Role.ADMIN.value, UserKind.ADMIN),
    (lambda s: s.role == Role.EBD_MANAGER.value, UserKind.MANAGER),
    (lambda s: s.role in _FINANCE_ROLES, UserKind.FINANCE),
)

_RULES: tuple[_Rule, ...] = _SESSION_RULES + (
    (lambda s: s.is_salesperson, UserKind.SALESPERSON),
    (lambda s: (s.client_type or "").upper() == RESELLER_CLIENT_TYPE, UserKind.RESELLER),
    (
        lambda s: s.is_superintendent or s.is_promoted_superintendent or s.role == Role.SUPERINTENDENT.value,
        UserKind.SUPERINTENDENT,
    ),
    (lambda s: s.is_reactivation_lead, UserKind.REACTIVATION_LEAD),
    (lambda s: s.is_teacher, UserKind.TEACHER),
    (lambda s: s.is_student, UserKind.STUDENT),
    (lambda s: Module.CHURCHES.value in s.modules, UserKind.FINANCIAL_MODULE),
    (lambda s: Module.EBD.value in s.modules, UserKind.SCHOOL_MODULE),
)

LANDING_PATHS: dict[UserKind, str] = {
    UserKind.ADMIN: "/admin",
    UserKind.MANAGER: "/admin/ebd",
    UserKind.FINANCE: "/dashboard",
    UserKind.SALESPERSON: "/vendedor",
    UserKind.RESELLER: "/ebd/catalogo",
    UserKind.SUPERINTENDENT: "/ebd/dashboard",
    UserKind.REACTIVATION_LEAD: "/ebd/dashboard",
    UserKind.TEACHER: "/ebd/professor",
    UserKind.STUDENT: "/ebd/aluno",
    UserKind.FINANCIAL_MODULE: "/dashboard",
    UserKind.SCHOOL_MODULE: "/ebd/dashboard",
    UserKind.DEFAULT: "/",
}


def resolve_session_kind(role: Optional[str]) -> Optional[UserKind]:
    """Kind implied by the session role, or None when lookups are needed."""
    signals = RoleSignals(role=role)
    for matches, kind in _SESSION_RULES:
        if matches(signals):
            return kind
    return None


def resolve_kind(signals: RoleSignals) -> UserKind:
    for matches, kind in _RULES:
        if matches(signals):
            return kind
    return UserKind.DEFAULT


def landing_path(kind: UserKind) -> str:
    return LANDING_PATHS[kind]

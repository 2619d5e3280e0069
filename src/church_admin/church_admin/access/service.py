from __future__ import annotations

from ..common.logging_utils import get_logger
from ..core.enums import Module, Role, UserKind
from .model import RoleSignals, SessionUser
from .repository import RoleLookupRepository
from .resolver import landing_path, resolve_kind, resolve_session_kind

logger = get_logger(__name__)

ALL_MODULES = [Module.CHURCHES.value, Module.ASSOCIATIONS.value, Module.EBD.value]


class RedirectService:
    """Use case: pick the landing page for an authenticated user."""

    def __init__(self, lookups: RoleLookupRepository):
        self._lookups = lookups

    def signals_for(self, user: SessionUser) -> RoleSignals:
        lookups = self._lookups
        church_id = user.church_id or lookups.church_for_user(user.user_id)
        modules = frozenset(lookups.active_modules(church_id)) if church_id else frozenset()
        return RoleSignals(
            role=user.role,
            is_salesperson=lookups.is_salesperson(user.email),
            client_type=lookups.client_type(user.user_id),
            is_superintendent=lookups.is_superintendent(user.user_id),
            is_promoted_superintendent=lookups.is_promoted_superintendent(user.user_id),
            is_reactivation_lead=lookups.is_reactivation_lead(user.email),
            is_teacher=lookups.is_teacher(user.user_id),
            is_student=lookups.is_student(user.user_id),
            modules=modules,
        )

    def kind_for(self, user: SessionUser) -> UserKind:
        session_kind = resolve_session_kind(user.role)
        if session_kind is not None:
            return session_kind
        try:
            return resolve_kind(self.signals_for(user))
        except Exception:
            logger.exception("landing lookup failed user=%s", user.user_id)
            return UserKind.DEFAULT

    def landing_for(self, user: SessionUser) -> str:
        return landing_path(self.kind_for(user))


class ModuleService:
    """Use case: which product modules show up in the user's menu."""

    def __init__(self, lookups: RoleLookupRepository):
        self._lookups = lookups

    def active_modules(self, user: SessionUser) -> list[str]:
        if user.role == Role.ADMIN.value:
            return list(ALL_MODULES)

        lookups = self._lookups
        if (
            lookups.is_salesperson(user.email)
            or lookups.is_superintendent(user.user_id)
            or lookups.is_reactivation_lead(user.email)
        ):
            return [Module.EBD.value]

        church_id = user.church_id or lookups.church_for_user(user.user_id)
        if not church_id:
            logger.info("no church found for user=%s", user.user_id)
            return []
        return list(lookups.active_modules(church_id))

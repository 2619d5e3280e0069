from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class SessionUser:
    """The authenticated user as kept in the session."""

    user_id: int
    email: str
    role: Optional[str] = None
    church_id: Optional[str] = None


@dataclass(frozen=True)
class RoleSignals:
    """Everything the landing resolver looks at, gathered up front."""

    role: Optional[str] = None
    is_salesperson: bool = False
    client_type: Optional[str] = None
    is_superintendent: bool = False
    is_promoted_superintendent: bool = False
    is_reactivation_lead: bool = False
    is_teacher: bool = False
    is_student: bool = False
    modules: frozenset[str] = field(default_factory=frozenset)

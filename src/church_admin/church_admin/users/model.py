from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """Usuário do sistema (login por e-mail).

    `role` is the raw value from the roles table; users without an
    administrative role keep None.
    """

    user_id: int
    full_name: str
    email: str
    password_hash: str
    role: Optional[str] = None
    church_id: Optional[str] = None
    is_active: bool = True

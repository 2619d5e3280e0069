from __future__ import annotations

from typing import Optional, Protocol, Sequence


class RoleLookupRepository(Protocol):
    """Read-only lookups behind the landing resolver and the module menu."""

    def is_salesperson(self, email: str) -> bool:
        """Case-insensitive match on the salesperson e-mail."""
        raise NotImplementedError

    def client_type(self, user_id: int) -> Optional[str]:
        raise NotImplementedError

    def is_superintendent(self, user_id: int) -> bool:
        """User is the superintendent of an active EBD client."""
        raise NotImplementedError

    def is_promoted_superintendent(self, user_id: int) -> bool:
        """Teacher promoted through an EBD role row."""
        raise NotImplementedError

    def is_reactivation_lead(self, email: str) -> bool:
        raise NotImplementedError

    def is_teacher(self, user_id: int) -> bool:
        raise NotImplementedError

    def is_student(self, user_id: int) -> bool:
        raise NotImplementedError

    def church_for_user(self, user_id: int) -> Optional[str]:
        """Owned church, else the church where the user is an active student or teacher."""
        raise NotImplementedError

    def active_modules(self, church_id: str) -> Sequence[str]:
        raise NotImplementedError

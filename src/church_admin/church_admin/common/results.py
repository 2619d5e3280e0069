from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class OperationResult:
    """Outcome of a use case with a primary write and best-effort follow-ups.

    `warnings` collects human-readable messages for secondary writes that
    failed; the primary write (identified by `id`) is kept.
    """

    id: Optional[int] = None
    warnings: list[str] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        return bool(self.warnings)

    def to_dict(self) -> dict:
        return {"id": self.id, "partial": self.partial, "warnings": list(self.warnings)}

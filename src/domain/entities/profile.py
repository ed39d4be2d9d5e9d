from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class ProfileRecord:
    id: str  # user id from Supabase auth
    email: str | None = None
    phone: str | None = None
    display_name: str | None = None
    user_type: str | None = None  # e.g. "farmer", "buyer"

    def to_row(self) -> dict[str, Any]:
        return asdict(self)

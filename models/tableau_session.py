from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class TableauSession:
    """Authenticated state obtained by signing in"""
    token: str = field(repr=False)
    site_luid: Optional[str] = None
    user_id: Optional[str] = None

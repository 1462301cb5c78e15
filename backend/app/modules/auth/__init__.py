# Authentication module

from app.modules.auth.dependencies import get_current_user
from app.modules.auth.ownership import ensure_owner, ensure_owns_all, is_owner

__all__ = [
    "get_current_user",
    "ensure_owner",
    "ensure_owns_all",
    "is_owner",
]

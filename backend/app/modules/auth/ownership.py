"""
Ownership guard shared by every board-scoped service.

Callers look the resource up first and raise the matching NotFound error
when it is missing; only then is ownership checked, so a missing id is
always a 404 and an existing id owned by someone else is a 403.
"""

from typing import Iterable, Optional

from app.core.exceptions import AuthorizationError


def is_owner(owner_id: Optional[str], caller_id: Optional[str]) -> bool:
    return owner_id is not None and caller_id is not None and str(owner_id) == str(caller_id)


def ensure_owner(owner_id: Optional[str], caller_id: Optional[str], message: str) -> None:
    """Raise AuthorizationError(message) unless caller_id owns the resource"""
    if not is_owner(owner_id, caller_id):
        raise AuthorizationError(message)


def ensure_owns_all(owner_ids: Iterable[Optional[str]], caller_id: Optional[str], message: str) -> None:
    """Raise AuthorizationError(message) unless caller_id owns every listed resource"""
    if not all(is_owner(owner_id, caller_id) for owner_id in owner_ids):
        raise AuthorizationError(message)

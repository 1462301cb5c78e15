"""
Unit Tests for the ownership guard
"""
import pytest

from app.core.exceptions import AuthorizationError
from app.modules.auth.ownership import is_owner, ensure_owner, ensure_owns_all


class TestOwnership:

    def test_is_owner(self):
        assert is_owner("u-1", "u-1") is True
        assert is_owner("u-1", "u-2") is False
        assert is_owner(None, "u-1") is False
        assert is_owner("u-1", None) is False

    def test_ensure_owner_passes(self):
        ensure_owner("u-1", "u-1", "nope")

    def test_ensure_owner_raises_with_message(self):
        with pytest.raises(AuthorizationError) as exc_info:
            ensure_owner("u-1", "u-2", "You do not have access to this board")

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "You do not have access to this board"

    def test_ensure_owns_all(self):
        ensure_owns_all(["u-1", "u-1"], "u-1", "nope")

        with pytest.raises(AuthorizationError):
            ensure_owns_all(["u-1", "u-2"], "u-1", "nope")

# frontend/test_auth.py
# Unit tests for the session context, route gate and role-gated affordances

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from frontend.auth import (
    ADD_PROJECT,
    ADMIN_BADGE,
    DASHBOARD,
    DELETE_PROJECT,
    LOGIN,
    PORTFOLIO,
    ROOT,
    SessionContext,
    is_admin,
    resolve_route,
    visible_affordances,
)
from frontend.session_store import MemoryStorage, SessionStore


def make_ctx(token=None, role=None) -> SessionContext:
    ctx = SessionContext(SessionStore(MemoryStorage()))
    if token:
        ctx.login(token, role)
    return ctx


class TestResolveRoute:
    """Protected views render only with a session; otherwise login."""

    @pytest.mark.parametrize("route", [DASHBOARD, PORTFOLIO])
    def test_protected_route_redirects_without_session(self, route):
        assert resolve_route(route, is_authenticated=False) == LOGIN

    @pytest.mark.parametrize("route", [DASHBOARD, PORTFOLIO])
    def test_protected_route_renders_with_session(self, route):
        assert resolve_route(route, is_authenticated=True) == route

    def test_root_follows_auth_state(self):
        assert resolve_route(ROOT, is_authenticated=True) == DASHBOARD
        assert resolve_route(ROOT, is_authenticated=False) == LOGIN

    def test_unknown_route_behaves_like_root(self):
        assert resolve_route("settings", is_authenticated=True) == DASHBOARD
        assert resolve_route(None, is_authenticated=False) == LOGIN

    def test_login_page(self):
        assert resolve_route(LOGIN, is_authenticated=False) == LOGIN
        assert resolve_route(LOGIN, is_authenticated=True) == DASHBOARD


class TestRoleGating:

    def test_admin_sees_all_admin_affordances(self):
        assert visible_affordances("ADMIN") == {ADD_PROJECT, DELETE_PROJECT, ADMIN_BADGE}

    @pytest.mark.parametrize("role", ["USER", "admin", "Admin", "", None, "OWNER"])
    def test_non_admin_sees_nothing(self, role):
        """Only the exact "ADMIN" string is privileged."""
        assert visible_affordances(role) == frozenset()
        assert not is_admin(role)


class TestSessionContext:

    def test_starts_unauthenticated(self):
        ctx = make_ctx()
        assert not ctx.is_authenticated
        assert ctx.role is None
        assert ctx.auth_header() == {}

    def test_login_then_logout(self):
        ctx = make_ctx()
        ctx.login("abc", "ADMIN")
        assert ctx.is_authenticated
        assert ctx.is_admin
        assert ctx.auth_header() == {"Authorization": "Bearer abc"}

        ctx.logout()
        assert not ctx.is_authenticated
        assert not ctx.is_admin
        assert ctx.auth_header() == {}

    def test_rehydrates_from_existing_store(self):
        """A context over an already-populated store starts authenticated."""
        store = SessionStore(MemoryStorage({"token": "abc", "userRole": "USER"}))
        ctx = SessionContext(store)
        assert ctx.is_authenticated
        assert ctx.role == "USER"
        assert not ctx.is_admin

    def test_token_read_at_call_time(self):
        """A token rotated in the store is used by the next header build."""
        store = SessionStore(MemoryStorage())
        ctx = SessionContext(store)
        ctx.login("old", "USER")
        store.save("new", "USER")
        assert ctx.auth_header() == {"Authorization": "Bearer new"}

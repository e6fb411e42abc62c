"""
frontend/auth.py
Authentication state and client-side route/affordance gating.

SessionContext is the single source of truth for "who is logged in". It is
built once per script run around a SessionStore and passed explicitly to the
API client and the views, so tests can inject an in-memory store.

IMPORTANT: every role check in this module is advisory UX only. The backend
performs the authoritative authorization check on each request; hiding a
button here is never a security boundary.
"""

from typing import Dict, FrozenSet, Optional
import streamlit as st

try:
    from frontend.config import log
    from frontend.session_store import Session, SessionStore
except ModuleNotFoundError:
    from config import log
    from session_store import Session, SessionStore


ADMIN_ROLE = "ADMIN"

# Routes
ROOT = "/"
LOGIN = "login"
DASHBOARD = "dashboard"
PORTFOLIO = "portfolio"

PROTECTED_ROUTES = frozenset({DASHBOARD, PORTFOLIO})

# Admin-only UI affordances
ADD_PROJECT = "add_project"
DELETE_PROJECT = "delete_project"
ADMIN_BADGE = "admin_badge"

ADMIN_AFFORDANCES: FrozenSet[str] = frozenset({ADD_PROJECT, DELETE_PROJECT, ADMIN_BADGE})


class SessionContext:
    """Explicit session context wrapping a SessionStore.

    All reads go through the store, so a token saved by another code path
    (or rotated) is observed on the next call.
    """

    def __init__(self, store: SessionStore):
        self.store = store

    @property
    def session(self) -> Optional[Session]:
        return self.store.load()

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    @property
    def token(self) -> Optional[str]:
        session = self.session
        return session.token if session else None

    @property
    def role(self) -> Optional[str]:
        session = self.session
        return session.role if session else None

    @property
    def is_admin(self) -> bool:
        return is_admin(self.role)

    def login(self, token: str, role: str) -> None:
        """Unauthenticated -> Authenticated after a successful credential exchange."""
        self.store.save(token, role)
        log("AUTH", "Session established")

    def logout(self) -> None:
        """Authenticated -> Unauthenticated (explicit logout or rejected token)."""
        self.store.clear()
        log("AUTH", "Session cleared")

    def auth_header(self) -> Dict[str, str]:
        """
        Authorization header dict for API requests.

        Returns:
            {"Authorization": "Bearer <token>"} if authenticated, {} otherwise
        """
        token = self.token
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}


def is_admin(role: Optional[str]) -> bool:
    """Only the exact "ADMIN" role string is privileged."""
    return role == ADMIN_ROLE


def visible_affordances(role: Optional[str]) -> FrozenSet[str]:
    """Admin-only affordances the given role may see (advisory)."""
    if is_admin(role):
        return ADMIN_AFFORDANCES
    return frozenset()


def resolve_route(requested: Optional[str], is_authenticated: bool) -> str:
    """
    Decide which page to render for a requested route.

    - login is always reachable; an authenticated user is sent to dashboard
    - protected routes render when authenticated, otherwise redirect to login
    - root and unknown routes go to dashboard or login depending on the flag
    """
    if requested == LOGIN:
        return DASHBOARD if is_authenticated else LOGIN
    if requested in PROTECTED_ROUTES:
        return requested if is_authenticated else LOGIN
    return DASHBOARD if is_authenticated else LOGIN


def require_auth(ctx: SessionContext, redirect_to_login: bool = True) -> bool:
    """
    Guard for protected pages - stops execution if not authenticated.

    Usage at top of page render functions:
        if not require_auth(ctx):
            return

    Returns:
        True if authenticated (continue execution), False otherwise
    """
    if not ctx.is_authenticated:
        st.warning("⚠️ You must be logged in to access this page.")

        if redirect_to_login:
            st.session_state["nav_page"] = LOGIN
            st.info("Please log in to continue.")

        if st.button("Go to Login", type="primary"):
            st.session_state["nav_page"] = LOGIN
            st.rerun()

        return False

    return True

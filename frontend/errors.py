"""
frontend/errors.py
Exception taxonomy for backend calls.

Every project operation has exactly one failure category. The user-facing
message is static per category: status codes and payloads are kept on the
exception for control flow only and are never rendered or printed.
"""

from typing import Optional


class PortfolioAppError(Exception):
    """Base class for all frontend errors."""


class ApiRequestError(PortfolioAppError):
    """Transport failure or non-2xx response from the backend.

    Attributes:
        status_code: HTTP status, or None when no response was received
        user_message: Static message safe to show in the page error region
    """

    user_message = "Request failed"

    def __init__(self, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(self.user_message)

    @property
    def session_expired(self) -> bool:
        """True when the backend rejected the bearer token (HTTP 401)."""
        return self.status_code == 401


class FetchFailed(ApiRequestError):
    user_message = "Failed to fetch projects"


class CreateFailed(ApiRequestError):
    user_message = "Failed to add project"


class DeleteFailed(ApiRequestError):
    user_message = "Failed to delete project"


class LoginFailed(ApiRequestError):
    # Only an explicit rejection means the credentials were wrong
    REJECTED_STATUSES = (400, 401, 403)

    @property
    def user_message(self) -> str:
        if self.status_code in self.REJECTED_STATUSES:
            return "Invalid username or password"
        return "Login failed. Please try again later."

    @property
    def session_expired(self) -> bool:
        # A rejected login is not an expired session
        return False

"""
frontend/api_client.py
Centralized API client for all backend requests.

This module ensures:
1. Every protected call attaches Authorization: Bearer <token>, read from the
   session context at call time (a rotated token is used on the next call)
2. Each operation fails with exactly one error category (FetchFailed,
   CreateFailed, DeleteFailed, LoginFailed)
3. No retry, no backoff, no queuing: a failure is terminal for that call
4. Tokens, status codes and payloads never reach printed output
"""

from typing import Any, Dict, List, Literal, Optional, Type, Union

import requests

try:
    from frontend.config import REQUEST_TIMEOUT, get_api_base_url, log
    from frontend.errors import ApiRequestError, CreateFailed, DeleteFailed, FetchFailed, LoginFailed
    from frontend.models import LoginResult, Project, ProjectDraft
except ModuleNotFoundError:
    from config import REQUEST_TIMEOUT, get_api_base_url, log
    from errors import ApiRequestError, CreateFailed, DeleteFailed, FetchFailed, LoginFailed
    from models import LoginResult, Project, ProjectDraft


__all__ = ["ProjectsClient", "is_public_endpoint"]

PUBLIC_PATHS = ("/auth/login",)


def is_public_endpoint(path: str) -> bool:
    """
    Check if endpoint is public (doesn't require authentication).

    Only the login exchange is public; every other endpoint is protected.
    """
    return path in PUBLIC_PATHS


class ProjectsClient:
    """CRUD operations on the remote "projects" collection.

    Args:
        session_ctx: SessionContext providing the bearer token
        base_url: API base URL (defaults to config.get_api_base_url())
        http: object exposing get/post/delete like the requests module
            (a requests.Session, or a test double)
        timeout: per-request timeout in seconds
    """

    def __init__(self, session_ctx, base_url: Optional[str] = None, http=None, timeout: int = REQUEST_TIMEOUT):
        self.session_ctx = session_ctx
        self.base_url = (base_url or get_api_base_url()).rstrip("/")
        self.http = http if http is not None else requests
        self.timeout = timeout

    def _request(
        self,
        method: Literal["GET", "POST", "DELETE"],
        path: str,
        error_cls: Type[ApiRequestError],
        json: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        url = f"{self.base_url}{path}"
        headers = {"Accept": "application/json"}

        if json is not None:
            headers["Content-Type"] = "application/json"

        if not is_public_endpoint(path):
            auth_headers = self.session_ctx.auth_header()
            if not auth_headers:
                # Never hit a protected endpoint without a token
                log("API", f"No session for {method} {path}")
                raise error_cls(401)
            headers.update(auth_headers)

        try:
            if method == "GET":
                resp = self.http.get(url, headers=headers, timeout=self.timeout)
            elif method == "POST":
                resp = self.http.post(url, json=json, headers=headers, timeout=self.timeout)
            elif method == "DELETE":
                resp = self.http.delete(url, headers=headers, timeout=self.timeout)
            else:
                raise ValueError(f"Unsupported HTTP method: {method}")
        except requests.exceptions.RequestException as e:
            # Exception text may embed the URL; only the type is printed
            log("API", f"{type(e).__name__} on {method} {path}")
            raise error_cls(None) from None

        if not 200 <= resp.status_code < 300:
            log("API", f"{error_cls.__name__} on {method} {path}")
            raise error_cls(resp.status_code)

        return resp

    def list_projects(self) -> List[Project]:
        """Fetch the full ordered collection.

        Raises:
            FetchFailed: on transport error, non-2xx, or malformed payload
        """
        resp = self._request("GET", "/projects", FetchFailed)
        try:
            data = resp.json()
            if not isinstance(data, list):
                raise ValueError("expected a list of projects")
            return [Project(**item) for item in data]
        except (ValueError, TypeError):
            log("API", "Malformed project list payload")
            raise FetchFailed(resp.status_code) from None

    def create_project(self, draft: Union[ProjectDraft, Dict[str, Any]]) -> Project:
        """Submit a new project and return the server's entity (with id).

        The draft is sent as-is; required-field checks belong to the form.

        Raises:
            CreateFailed: on transport error, non-2xx, or malformed payload
        """
        if isinstance(draft, dict):
            draft = ProjectDraft(**draft)
        resp = self._request("POST", "/projects", CreateFailed, json=draft.to_payload())
        try:
            return Project(**resp.json())
        except (ValueError, TypeError):
            log("API", "Malformed created project payload")
            raise CreateFailed(resp.status_code) from None

    def delete_project(self, project_id: Union[int, str]) -> None:
        """Remove one project by id. No response body is required.

        Raises:
            DeleteFailed: on transport error or non-2xx
        """
        self._request("DELETE", f"/projects/{project_id}", DeleteFailed)

    def authenticate(self, username: str, password: str) -> LoginResult:
        """Exchange credentials for a token and role via the public login endpoint.

        Does not touch the session; the caller decides to call session_ctx.login().

        Raises:
            LoginFailed: on transport error, non-2xx, or a response without token/role
        """
        resp = self._request(
            "POST",
            "/auth/login",
            LoginFailed,
            json={"username": username, "password": password},
        )
        try:
            return LoginResult(**resp.json())
        except (ValueError, TypeError):
            log("API", "Malformed login payload")
            raise LoginFailed(resp.status_code) from None

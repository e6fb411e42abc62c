"""
frontend/views.py

Per-page view state for the Dashboard and Portfolio pages, independent of
Streamlit so it can be driven directly from tests.

Failure policy: errors are caught at the operation boundary and turned into
one static message per category. The displayed collection is never changed
by a failed call (no optimistic updates).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

try:
    from frontend.config import log
    from frontend.errors import ApiRequestError, CreateFailed, DeleteFailed, FetchFailed
    from frontend.models import Project, ProjectDraft
except ModuleNotFoundError:
    from config import log
    from errors import ApiRequestError, CreateFailed, DeleteFailed, FetchFailed
    from models import Project, ProjectDraft


DASHBOARD_FETCH_ERROR = "Failed to fetch projects"
PORTFOLIO_FETCH_ERROR = "Failed to fetch portfolio projects"

DELETE_CONFIRMATION = "Are you sure you want to delete this project?"


class RequestSequencer:
    """Hands out increasing tickets; only the latest ticket may apply its result."""

    def __init__(self) -> None:
        self._latest = 0

    def begin(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, ticket: int) -> bool:
        return ticket == self._latest


def validate_draft(draft: ProjectDraft) -> List[str]:
    """Form-level checks: title and description are required."""
    problems = []
    if not draft.title.strip():
        problems.append("Project title is required.")
    if not draft.description.strip():
        problems.append("Description is required.")
    return problems


@dataclass
class ProjectsView:
    """State of one projects page (dashboard or portfolio)."""
    fetch_error_message: str = DASHBOARD_FETCH_ERROR
    projects: List[Project] = field(default_factory=list)
    loading: bool = True
    error: str = ""
    show_form: bool = False
    draft: ProjectDraft = field(default_factory=ProjectDraft)
    session_expired: bool = False
    sequencer: RequestSequencer = field(default_factory=RequestSequencer)

    def _fail(self, err: ApiRequestError, message: str) -> None:
        self.error = message
        if err.session_expired:
            self.session_expired = True

    def begin_refresh(self) -> int:
        """Start a list fetch; returns the ticket its response must present."""
        self.loading = True
        return self.sequencer.begin()

    def apply_refresh(self, ticket: int, projects: Optional[List[Project]] = None,
                      error: Optional[ApiRequestError] = None) -> bool:
        """Apply a list-fetch outcome. Returns False if the ticket was superseded."""
        if not self.sequencer.is_current(ticket):
            log("VIEW", "Discarding superseded project list response")
            return False
        if error is not None:
            self._fail(error, self.fetch_error_message)
        else:
            self.projects = list(projects or [])
        self.loading = False
        return True

    def refresh(self, client) -> bool:
        """Fetch the collection and replace the displayed list on success.

        On failure the previous list is kept and the fetch error is set.
        """
        ticket = self.begin_refresh()
        try:
            projects = client.list_projects()
        except FetchFailed as e:
            return self.apply_refresh(ticket, error=e)
        return self.apply_refresh(ticket, projects=projects)

    def toggle_form(self) -> None:
        self.show_form = not self.show_form

    def add_project(self, client, draft: Union[ProjectDraft, Dict[str, Any]]) -> Optional[Project]:
        """Create a project; append exactly the server's returned entity."""
        if isinstance(draft, dict):
            draft = ProjectDraft(**draft)
        try:
            created = client.create_project(draft)
        except CreateFailed as e:
            self._fail(e, e.user_message)
            return None
        self.projects = self.projects + [created]
        self.draft = ProjectDraft()
        self.show_form = False
        return created

    def delete_project(self, client, project_id: Union[int, str], confirmed: bool) -> bool:
        """Delete after explicit confirmation; remove only that id on success."""
        if not confirmed:
            return False
        try:
            client.delete_project(project_id)
        except DeleteFailed as e:
            self._fail(e, e.user_message)
            return False
        self.projects = [p for p in self.projects if p.id != project_id]
        return True


def dashboard_view() -> ProjectsView:
    return ProjectsView(fetch_error_message=DASHBOARD_FETCH_ERROR)


def portfolio_view() -> ProjectsView:
    return ProjectsView(fetch_error_message=PORTFOLIO_FETCH_ERROR)

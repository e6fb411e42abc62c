# frontend/app.py
# Portfolio App – login, project dashboard and public-style portfolio page
#
# Run from repo root: streamlit run frontend/app.py
# Or from frontend folder: streamlit run app.py

from __future__ import annotations

import html
from typing import Optional

import streamlit as st

# Import environment config (robust fallback for different run contexts)
try:
    from frontend.config import ENABLE_DEBUG_UI, IS_DEV, get_storage_backend, get_storage_path, log
except ModuleNotFoundError:
    from config import ENABLE_DEBUG_UI, IS_DEV, get_storage_backend, get_storage_path, log

try:
    from frontend.auth import (
        ADD_PROJECT, ADMIN_BADGE, DASHBOARD, DELETE_PROJECT, LOGIN, PORTFOLIO, ROOT,
        SessionContext, require_auth, resolve_route, visible_affordances,
    )
    from frontend.session_store import FileStorage, MappingStorage, SessionStore
    from frontend.api_client import ProjectsClient
    from frontend.errors import LoginFailed
    from frontend.models import Project, ProjectDraft
    from frontend.views import DELETE_CONFIRMATION, ProjectsView, dashboard_view, portfolio_view, validate_draft
    from frontend.dev_observability import (
        track_event, snapshot_state, get_recent_events, clear_debug_history, export_snapshot_json
    )
except ModuleNotFoundError:
    from auth import (
        ADD_PROJECT, ADMIN_BADGE, DASHBOARD, DELETE_PROJECT, LOGIN, PORTFOLIO, ROOT,
        SessionContext, require_auth, resolve_route, visible_affordances,
    )
    from session_store import FileStorage, MappingStorage, SessionStore
    from api_client import ProjectsClient
    from errors import LoginFailed
    from models import Project, ProjectDraft
    from views import DELETE_CONFIRMATION, ProjectsView, dashboard_view, portfolio_view, validate_draft
    from dev_observability import (
        track_event, snapshot_state, get_recent_events, clear_debug_history, export_snapshot_json
    )


st.set_page_config(page_title="Portfolio App", page_icon="📁", layout="wide")

CUSTOM_CSS = """
<style>
.tag {
    display: inline-block; font-size: 0.8rem; padding: 0.1rem 0.55rem;
    margin: 0 0.3rem 0.3rem 0; border-radius: 999px;
    background: rgba(31,119,180,0.10); color: #1f77b4;
    border: 1px solid rgba(31,119,180,0.25);
}
.admin-badge {
    display: inline-block; font-size: 0.75rem; padding: 0.1rem 0.5rem;
    border-radius: 999px; background: rgba(220,53,69,0.10); color: #b02a37;
    border: 1px solid rgba(220,53,69,0.25);
}
</style>
"""

st.markdown(CUSTOM_CSS, unsafe_allow_html=True)

KEYS_OF_INTEREST = [
    "nav_page",
    "_view_page",
    "_pending_delete",
    "_session_store",
]

NAV_LABELS = {DASHBOARD: "Dashboard", PORTFOLIO: "Portfolio"}

ss = st.session_state


# --------------------------------------------------------------------
# Session + navigation helpers
# --------------------------------------------------------------------

def build_session_context() -> SessionContext:
    if get_storage_backend() == "session":
        storage = MappingStorage(ss)
    else:
        storage = FileStorage(get_storage_path())
    return SessionContext(SessionStore(storage))


def go_to(page: str) -> None:
    """Set nav_page and rerun; the only way pages change."""
    ss["nav_page"] = page
    st.rerun()


def dev_event(name: str, details: Optional[dict] = None) -> None:
    if IS_DEV:
        track_event(ss, name, details)


def handle_logout(ctx: SessionContext, reason: str = "logout") -> None:
    ctx.logout()
    ss.pop("_view", None)
    ss.pop("_view_page", None)
    ss.pop("_pending_delete", None)
    dev_event(reason)
    go_to(LOGIN)


def get_view(page: str, client: ProjectsClient) -> ProjectsView:
    """Per-page view state; dropped and refetched when the page changes."""
    if ss.get("_view_page") != page or "_view" not in ss:
        view = dashboard_view() if page == DASHBOARD else portfolio_view()
        view.refresh(client)
        if view.error:
            dev_event("fetch_failed", {"page": page})
        ss["_view"] = view
        ss["_view_page"] = page
        ss.pop("_pending_delete", None)
    return ss["_view"]


def check_session_expired(ctx: SessionContext, view: ProjectsView) -> None:
    if view.session_expired:
        st.warning("🔒 Your session has expired. Please log in again.")
        handle_logout(ctx, reason="session_expired")


# --------------------------------------------------------------------
# Rendering
# --------------------------------------------------------------------

def render_tags(project: Project) -> None:
    if project.tags:
        tags_html = "".join(f'<span class="tag">{html.escape(tag)}</span>' for tag in project.tags)
        st.markdown(tags_html, unsafe_allow_html=True)


def render_navbar(ctx: SessionContext) -> None:
    with st.sidebar:
        st.title("Portfolio App")
        for page, label in NAV_LABELS.items():
            if st.button(label, key=f"nav_{page}", use_container_width=True):
                go_to(page)
        if ADMIN_BADGE in visible_affordances(ctx.role):
            st.markdown('<span class="admin-badge">Admin</span>', unsafe_allow_html=True)
        st.divider()
        if st.button("Logout", key="logout_btn", use_container_width=True):
            handle_logout(ctx)


def render_debug_panel() -> None:
    with st.sidebar.expander("🛠 Debug (dev only)"):
        st.json(snapshot_state(ss, KEYS_OF_INTEREST))
        for event in get_recent_events(ss, limit=10):
            st.text(f"{event['ts']} {event['name']}")
        st.download_button(
            "Export snapshot",
            data=export_snapshot_json(ss, KEYS_OF_INTEREST),
            file_name="portfolio_app_snapshot.json",
            mime="application/json",
        )
        if st.button("Clear history", key="clear_debug"):
            clear_debug_history(ss)
            st.rerun()


def render_login(ctx: SessionContext, client: ProjectsClient) -> None:
    st.header("Login")

    with st.form("login_form"):
        username = st.text_input("Username", key="login_username")
        password = st.text_input("Password", type="password", key="login_password")
        submitted = st.form_submit_button("Login")

    if submitted:
        if not username or not password:
            st.error("Please enter username and password.")
            return
        try:
            result = client.authenticate(username, password)
        except LoginFailed as e:
            dev_event("login_failed")
            st.error(e.user_message)
            return
        ctx.login(result.token, result.role)
        dev_event("login_success", {"role": result.role})
        go_to(DASHBOARD)


def render_project_form(view: ProjectsView, client: ProjectsClient) -> None:
    with st.form("project_form", clear_on_submit=False):
        title = st.text_input("Project Title", value=view.draft.title, placeholder="Enter project title")
        description = st.text_area(
            "Description", value=view.draft.description, placeholder="Enter project description", height=110
        )
        technologies = st.text_input(
            "Technologies (comma separated)", value=view.draft.technologies, placeholder="React, Node.js, MongoDB"
        )
        link = st.text_input("Project Link", value=view.draft.link, placeholder="https://example.com")
        submitted = st.form_submit_button("Save Project")

    if submitted:
        draft = ProjectDraft(title=title, description=description, technologies=technologies, link=link)
        view.draft = draft
        problems = validate_draft(draft)
        if problems:
            for problem in problems:
                st.error(problem)
            return
        if view.add_project(client, draft) is not None:
            dev_event("project_created")
        st.rerun()


def render_dashboard(ctx: SessionContext, client: ProjectsClient) -> None:
    if not require_auth(ctx):
        return

    view = get_view(DASHBOARD, client)
    check_session_expired(ctx, view)
    affordances = visible_affordances(ctx.role)

    st.header("Dashboard")
    st.markdown(f"Welcome back! Role: **{ctx.role}**")

    if view.error:
        st.error(view.error)

    # Advisory only: the backend re-checks authorization on every mutation
    if ADD_PROJECT in affordances:
        if st.button("Cancel" if view.show_form else "+ Add New Project", key="toggle_form"):
            view.toggle_form()
            st.rerun()
        if view.show_form:
            render_project_form(view, client)

    st.subheader("My Projects")
    if view.loading:
        st.info("Loading projects...")
        return
    if not view.projects:
        st.caption("No projects found.")
        return

    pending = ss.get("_pending_delete")
    cols = st.columns(3)
    for idx, project in enumerate(view.projects):
        with cols[idx % 3].container(border=True):
            st.markdown(f"#### {project.title}")
            st.write(project.description)
            render_tags(project)
            if project.has_link:
                st.markdown(f"[View Project →]({project.link})")
            if DELETE_PROJECT not in affordances:
                continue
            if pending == project.id:
                st.warning(DELETE_CONFIRMATION)
                c1, c2 = st.columns(2)
                if c1.button("Yes, delete", key=f"confirm_del_{project.id}", type="primary"):
                    ss.pop("_pending_delete", None)
                    if view.delete_project(client, project.id, confirmed=True):
                        dev_event("project_deleted", {"project_id": str(project.id)})
                    st.rerun()
                if c2.button("Cancel", key=f"cancel_del_{project.id}"):
                    ss.pop("_pending_delete", None)
                    st.rerun()
            elif st.button("Delete", key=f"del_{project.id}"):
                ss["_pending_delete"] = project.id
                st.rerun()


def render_portfolio(ctx: SessionContext, client: ProjectsClient) -> None:
    if not require_auth(ctx):
        return

    view = get_view(PORTFOLIO, client)
    check_session_expired(ctx, view)

    st.header("My Portfolio")
    st.caption("A showcase of my projects and technical expertise")

    if view.error:
        st.error(view.error)

    if view.loading:
        st.info("Loading portfolio...")
        return
    if not view.projects:
        st.caption("No projects in portfolio yet.")
        return

    for project in view.projects:
        with st.container(border=True):
            st.subheader(project.title)
            st.write(project.description)
            if project.tags:
                st.markdown("**Technologies:**")
                render_tags(project)
            if project.has_link:
                st.markdown(f"[Visit Project →]({project.link})")


def main() -> None:
    ctx = build_session_context()
    client = ProjectsClient(ctx)

    requested = ss.get("nav_page") or ROOT
    page = resolve_route(requested, ctx.is_authenticated)
    if page != requested:
        log("NAV", f"{requested} -> {page}")
    ss["nav_page"] = page

    if ctx.is_authenticated:
        render_navbar(ctx)
        if ENABLE_DEBUG_UI:
            render_debug_panel()

    if page == DASHBOARD:
        render_dashboard(ctx, client)
    elif page == PORTFOLIO:
        render_portfolio(ctx, client)
    else:
        ss.pop("_view", None)
        ss.pop("_view_page", None)
        render_login(ctx, client)


if __name__ == "__main__":
    main()

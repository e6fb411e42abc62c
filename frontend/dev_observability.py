# frontend/dev_observability.py
# DEV-only event timeline and redacted state snapshots for the debug panel

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

# Keys whose values must never be displayed or exported
SENSITIVE_KEYS = {
    "token",
    "password",
    "authorization",
    "secret",
    "_session_store",
}

MAX_EVENTS = 100


def redact_value(key: str, value: Any) -> Any:
    """
    Redact sensitive values.
    - If key names a credential: return "[REDACTED]"
    - If key looks like an id and the value is a long string: last 4 chars
    - Otherwise: return actual value
    """
    key_lower = key.lower()

    if any(sensitive in key_lower for sensitive in SENSITIVE_KEYS):
        return "[REDACTED]"

    if key_lower.endswith("id") and isinstance(value, str) and len(value) > 4:
        return f"…{value[-4:]}"

    return value


def now_iso() -> str:
    """Return current timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def track_event(session_state: dict, event_name: str, details: Optional[Dict[str, Any]] = None) -> None:
    """
    Append an event to the session event timeline.

    Args:
        session_state: Streamlit session_state (or any dict)
        event_name: Short name (e.g., "login_success", "fetch_failed")
        details: Optional context, redacted key by key
    """
    if "_dev_events" not in session_state:
        session_state["_dev_events"] = []

    event = {
        "ts": now_iso(),
        "name": event_name,
    }

    if details:
        event["details"] = {k: redact_value(k, v) for k, v in details.items()}

    session_state["_dev_events"].append(event)

    if len(session_state["_dev_events"]) > MAX_EVENTS:
        session_state["_dev_events"] = session_state["_dev_events"][-MAX_EVENTS:]


def snapshot_state(session_state: dict, keys_of_interest: List[str]) -> Dict[str, Any]:
    """Redacted view of the given keys; missing keys are reported as such."""
    snapshot = {}
    for key in keys_of_interest:
        if key in session_state:
            snapshot[key] = {"exists": True, "value": redact_value(key, session_state[key])}
        else:
            snapshot[key] = {"exists": False}
    return snapshot


def get_recent_events(session_state: dict, limit: int = 30) -> List[Dict[str, Any]]:
    """Most recent events first."""
    events = session_state.get("_dev_events", [])
    return list(reversed(events[-limit:]))


def clear_debug_history(session_state: dict) -> None:
    """Drop the event timeline without touching app state."""
    if "_dev_events" in session_state:
        session_state["_dev_events"] = []


def export_snapshot_json(session_state: dict, keys_of_interest: List[str]) -> str:
    """Diagnostic snapshot plus recent events as formatted JSON."""
    export = {
        "timestamp": now_iso(),
        "state": snapshot_state(session_state, keys_of_interest),
        "recent_events": get_recent_events(session_state, limit=50),
    }
    return json.dumps(export, indent=2, default=str)

# frontend/config.py
# Environment-aware configuration for the Portfolio App frontend

import os
from pathlib import Path
from typing import Literal

# Environment detection - normalize to lowercase
_raw_env = os.environ.get("ENV", "local").lower()
ENV: Literal["local", "staging", "production"] = _raw_env if _raw_env in ("local", "staging", "production") else "local"  # type: ignore

# Environment flags (using normalized ENV)
IS_LOCAL = (ENV == "local")
IS_STAGING = (ENV == "staging")
IS_PROD = (ENV == "production")

IS_DEV = IS_LOCAL

# Hardcoded fallback used when API_URL is not set
DEFAULT_API_URL = "http://localhost:8080/api"


def get_env() -> Literal["local", "staging", "production"]:
    """
    Get current environment with normalization.

    Returns:
        "local", "staging", or "production"
    """
    return ENV


def validate_api_url(url: str, env: str) -> None:
    """
    Validate API base URL according to environment security rules.

    Args:
        url: The API base URL to validate
        env: Current environment ("local", "staging", "production")

    Raises:
        ValueError: If URL violates security constraints for the environment
    """
    if not url:
        raise ValueError("API base URL cannot be empty")

    if not url.startswith(("http://", "https://")):
        raise ValueError(f"API base URL must be http(s). Got: {url}")

    # Production/staging must use HTTPS and never localhost
    if env in ("staging", "production"):
        if not url.startswith("https://"):
            raise ValueError(f"Production/staging must use HTTPS. Got: {url}")
        if "127.0.0.1" in url or "localhost" in url:
            raise ValueError(f"Production/staging cannot use localhost URLs. Got: {url}")


def get_api_base_url() -> str:
    """
    Get API base URL.

    Priority:
    1. API_URL environment variable (validated for the current ENV)
    2. DEFAULT_API_URL

    Returns:
        API base URL with trailing slash removed

    Raises:
        ValueError: If API_URL is set but invalid for the environment
    """
    api_url = os.environ.get("API_URL", "").strip()
    if api_url:
        url = api_url.rstrip("/")
        validate_api_url(url, ENV)
        return url

    return DEFAULT_API_URL


def get_storage_path() -> Path:
    """Location of the persisted session document."""
    raw = os.environ.get("STORAGE_PATH", "").strip()
    if raw:
        return Path(raw).expanduser()
    return Path.home() / ".portfolio_app" / "session.json"


def get_storage_backend() -> Literal["file", "session"]:
    """
    Where the session (token + role) is persisted.

    "session" (default): st.session_state, one session per browser tab
    "file": JSON document at get_storage_path(), shared by every browser
        connected to this server; opt-in for single-user local runs only
    """
    raw = os.environ.get("STORAGE_BACKEND", "session").strip().lower()
    return "file" if raw == "file" else "session"


# Request timeout in seconds (no retries are ever attempted)
REQUEST_TIMEOUT = int(os.environ.get("REQUEST_TIMEOUT", "20"))

# Feature flags
ENABLE_DEBUG_UI = IS_DEV  # Show debug panel only in dev
ENABLE_VERBOSE_LOGGING = IS_DEV or IS_STAGING


def log(tag: str, message: str) -> None:
    """Print a tagged diagnostic line when verbose logging is enabled.

    Callers must never pass tokens, passwords or response payloads.
    """
    if ENABLE_VERBOSE_LOGGING:
        print(f"[{tag}] {message}")


if ENABLE_VERBOSE_LOGGING:
    print(f"[CONFIG] Environment: {ENV}")
    print(f"[CONFIG] API URL override: {'set' if os.environ.get('API_URL') else 'not set'}")
    print(f"[CONFIG] Debug UI: {'enabled' if ENABLE_DEBUG_UI else 'disabled'}")

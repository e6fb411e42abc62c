# frontend/test_config.py
# Unit tests for environment-driven configuration

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import frontend.config as config_module
from frontend.config import DEFAULT_API_URL, validate_api_url


def test_default_api_url_when_unset(monkeypatch):
    monkeypatch.delenv("API_URL", raising=False)
    assert config_module.get_api_base_url() == DEFAULT_API_URL


def test_api_url_override_strips_trailing_slash(monkeypatch):
    monkeypatch.setattr(config_module, "ENV", "local")
    monkeypatch.setenv("API_URL", "http://10.0.0.5:9000/api/")
    assert config_module.get_api_base_url() == "http://10.0.0.5:9000/api"


def test_production_rejects_plain_http(monkeypatch):
    monkeypatch.setattr(config_module, "ENV", "production")
    monkeypatch.setenv("API_URL", "http://portfolio.example.com/api")
    with pytest.raises(ValueError):
        config_module.get_api_base_url()


@pytest.mark.parametrize("url,env", [
    ("", "local"),
    ("ftp://example.com", "local"),
    ("https://localhost:8080/api", "staging"),
    ("https://127.0.0.1/api", "production"),
])
def test_validate_api_url_rejects(url, env):
    with pytest.raises(ValueError):
        validate_api_url(url, env)


def test_validate_api_url_accepts_https_in_production():
    validate_api_url("https://portfolio.example.com/api", "production")


def test_storage_path_override(monkeypatch, tmp_path):
    monkeypatch.setenv("STORAGE_PATH", str(tmp_path / "s.json"))
    assert config_module.get_storage_path() == tmp_path / "s.json"


def test_storage_backend(monkeypatch):
    """Per-tab session state unless the shared file is explicitly requested."""
    monkeypatch.delenv("STORAGE_BACKEND", raising=False)
    assert config_module.get_storage_backend() == "session"
    monkeypatch.setenv("STORAGE_BACKEND", "bogus")
    assert config_module.get_storage_backend() == "session"
    monkeypatch.setenv("STORAGE_BACKEND", "FILE")
    assert config_module.get_storage_backend() == "file"

"""Tests for configuration loading and validation."""

import sys
from pathlib import Path

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from prstats.config import DEFAULT_API_URL, load_config
from prstats.errors import AuthenticationError, ConfigurationError
from prstats.models import AnalysisType, OutputFormat


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("GITHUB_TOKEN", "GITHUB_OAUTH", "GITHUB_API_URL", "GITHUB_ENDPOINT"):
        monkeypatch.delenv(name, raising=False)


def _load(**overrides):
    values = {
        "repo_name": "octo/repo",
        "analysis_type": AnalysisType.MERGED,
        "output_format": OutputFormat.TEXT,
        "pr_limit": 10,
    }
    values.update(overrides)
    return load_config(**values)


def test_load_config_reads_token_from_environment(monkeypatch):
    """Verify the GitHub token and default API URL are loaded."""
    monkeypatch.setenv("GITHUB_TOKEN", "  secret  ")

    config = _load(include_individual_stats=True)

    assert config.token == "secret"
    assert config.api_url == DEFAULT_API_URL
    assert config.include_individual_stats is True
    assert config.tickets == ()


def test_load_config_falls_back_to_oauth_variable_and_custom_api_url(monkeypatch):
    """Verify GITHUB_OAUTH and GITHUB_API_URL are honored."""
    monkeypatch.setenv("GITHUB_OAUTH", "oauth-token")
    monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3/")

    config = _load()

    assert config.token == "oauth-token"
    assert config.api_url == "https://ghe.example.com/api/v3"


def test_load_config_accepts_github_endpoint_variable(monkeypatch):
    """Verify GITHUB_ENDPOINT sets the API URL when GITHUB_API_URL is unset."""
    monkeypatch.setenv("GITHUB_TOKEN", "secret")
    monkeypatch.setenv("GITHUB_ENDPOINT", "https://ghe.example.com/api/v3")

    assert _load().api_url == "https://ghe.example.com/api/v3"

    monkeypatch.setenv("GITHUB_API_URL", "https://other.example.com/api")

    assert _load().api_url == "https://other.example.com/api"


def test_load_config_missing_token_raises_authentication_error():
    """Verify a missing token is surfaced as an authentication failure."""
    with pytest.raises(AuthenticationError):
        _load()


@pytest.mark.parametrize("repo_name", ["repo", "/repo", "octo/", "a/b/c"])
def test_load_config_rejects_malformed_repo_name(monkeypatch, repo_name):
    """Verify repository names must be owner/name."""
    monkeypatch.setenv("GITHUB_TOKEN", "secret")

    with pytest.raises(ConfigurationError):
        _load(repo_name=repo_name)


def test_load_config_rejects_non_positive_limit(monkeypatch):
    """Verify pr_limit must be greater than zero."""
    monkeypatch.setenv("GITHUB_TOKEN", "secret")

    with pytest.raises(ConfigurationError):
        _load(pr_limit=0)


def test_load_config_code_review_requires_tickets(monkeypatch):
    """Verify the code review report needs at least one ticket."""
    monkeypatch.setenv("GITHUB_TOKEN", "secret")

    with pytest.raises(ConfigurationError):
        _load(analysis_type=AnalysisType.CODEREVIEW, tickets=" , ")

    config = _load(analysis_type=AnalysisType.CODEREVIEW, tickets="ABC-1, ABC-2,")
    assert config.tickets == ("ABC-1", "ABC-2")

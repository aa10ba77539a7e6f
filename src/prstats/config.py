"""Configuration parsing and validation for the GitHub PR statistics tool."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import AuthenticationError, ConfigurationError
from .models import AnalysisType, OutputFormat

DEFAULT_API_URL = "https://api.github.com"
TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GITHUB_OAUTH")
API_URL_ENV_VARS = ("GITHUB_API_URL", "GITHUB_ENDPOINT")


@dataclass(frozen=True)
class Config:
    """Validated runtime settings used by the report generator."""

    repo_name: str
    analysis_type: AnalysisType
    output_format: OutputFormat
    pr_limit: int
    include_individual_stats: bool
    token: str
    tickets: Tuple[str, ...] = ()
    api_url: str = DEFAULT_API_URL


def _read_env(names: Tuple[str, ...]) -> str:
    for name in names:
        value = os.getenv(name, "").strip()
        if value:
            return value
    return ""


def load_config(
    repo_name: str,
    analysis_type: AnalysisType,
    output_format: OutputFormat,
    pr_limit: int,
    include_individual_stats: bool = False,
    tickets: Optional[str] = None,
) -> Config:
    """Build and validate application configuration.

    Args:
        repo_name: Repository in ``owner/name`` form.
        analysis_type: Which report to produce.
        output_format: Text or JSON output.
        pr_limit: Positive maximum number of pull requests to fetch.
        include_individual_stats: Whether to tally per-contributor reviews.
        tickets: Comma-separated ticket identifiers for the code review report.

    Returns:
        A validated ``Config`` instance.

    Raises:
        ConfigurationError: If a value is out of range or a required option
            for the chosen analysis is missing.
        AuthenticationError: If no GitHub token is configured.
    """
    owner, _, name = repo_name.strip().partition("/")
    if not owner or not name or "/" in name:
        raise ConfigurationError(
            f"Invalid value for 'repo-name': expected 'owner/name', got '{repo_name}'."
        )

    if pr_limit <= 0:
        raise ConfigurationError("Invalid value for 'pr-limit': expected an integer greater than 0.")

    parsed_tickets = tuple(
        ticket.strip() for ticket in (tickets or "").split(",") if ticket.strip()
    )
    if analysis_type is AnalysisType.CODEREVIEW and not parsed_tickets:
        raise ConfigurationError("--tickets can not be empty when doing a code review report.")

    token = _read_env(TOKEN_ENV_VARS)
    if not token:
        raise AuthenticationError(
            "Missing required GitHub access token. "
            "Set the 'GITHUB_TOKEN' environment variable before running the report."
        )

    api_url = _read_env(API_URL_ENV_VARS) or DEFAULT_API_URL

    return Config(
        repo_name=f"{owner}/{name}",
        analysis_type=analysis_type,
        output_format=output_format,
        pr_limit=pr_limit,
        include_individual_stats=include_individual_stats,
        token=token,
        tickets=parsed_tickets,
        api_url=api_url.rstrip("/"),
    )

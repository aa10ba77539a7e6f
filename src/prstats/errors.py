"""Custom exception types for the GitHub PR statistics tool."""


class PRStatsError(Exception):
    """Base exception for all PR statistics errors surfaced to the user."""


class ConfigurationError(PRStatsError):
    """Raised when runtime configuration values are missing or invalid."""


class AuthenticationError(PRStatsError):
    """Raised when GitHub credentials are unavailable or rejected."""


class ApiError(PRStatsError):
    """Raised when a GitHub API request fails or returns an unexpected response."""


class DataValidationError(PRStatsError):
    """Raised when an API payload is missing fields required for analysis."""

"""GitHub REST API client for pull request statistics."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests

from .config import Config
from .errors import ApiError, AuthenticationError, DataValidationError
from .models import ChangedFile, PullRequest, Review, ReviewState

logger = logging.getLogger(__name__)

GHOST_LOGIN = "ghost"


class GitHubClient:
    """Small, typed client for the GitHub pull request APIs."""

    _API_VERSION = "2022-11-28"
    _PAGE_SIZE = 100

    def __init__(self, config: Config, timeout_seconds: int = 30) -> None:
        """Initialize an authenticated GitHub API client.

        Args:
            config: Validated runtime configuration including repository and token.
            timeout_seconds: Per-request timeout in seconds.
        """
        self._config = config
        self._timeout_seconds = timeout_seconds
        self._base_url = f"{config.api_url}/repos/{config.repo_name}"

        self._session = requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {config.token}",
                "X-GitHub-Api-Version": self._API_VERSION,
            }
        )

    def _build_url(self, path: str) -> str:
        """Build a fully qualified API URL from a path below the repository."""
        if not path:
            return self._base_url
        return f"{self._base_url}/{path.lstrip('/')}"

    def _parse_datetime(self, value: Optional[str]) -> Optional[datetime]:
        """Parse GitHub ISO8601 timestamps into timezone-aware UTC datetimes."""
        if not value:
            return None

        normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
        parsed = datetime.fromisoformat(normalized)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)

    def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Execute a single GET request and return the decoded JSON payload.

        Raises:
            AuthenticationError: If GitHub rejects the token (HTTP 401).
            ApiError: If the request fails, returns HTTP >= 400, or does not
                return valid JSON.
        """
        url = self._build_url(path)

        try:
            response = self._session.get(url, params=params, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise ApiError(f"GitHub request failed: GET {url}") from exc

        status_code = response.status_code
        if status_code == 401:
            raise AuthenticationError(
                "GitHub rejected the access token: "
                f"GET {url} returned {status_code} - {response.text}"
            )

        if status_code >= 400:
            raise ApiError(
                "GitHub API request failed: "
                f"GET {url} returned {status_code} - {response.text}"
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"GitHub API returned invalid JSON: GET {url}") from exc

    def _get_paginated(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Collect list items across ``page``/``per_page`` pages.

        Stops at the first short page or once ``limit`` items are collected.
        """
        items: List[Dict[str, Any]] = []
        page_size = self._PAGE_SIZE if limit is None else min(self._PAGE_SIZE, limit)
        page = 1

        while True:
            query = dict(params or {})
            query["per_page"] = page_size
            query["page"] = page

            payload = self._get_json(path, params=query)
            if not isinstance(payload, list):
                raise ApiError(
                    f"GitHub API returned unexpected payload shape: GET {self._build_url(path)}"
                )

            items.extend(payload)

            if limit is not None and len(items) >= limit:
                return items[:limit]

            if len(payload) < page_size:
                return items

            page += 1

    def _login(self, user: Optional[Dict[str, Any]]) -> str:
        return str((user or {}).get("login") or GHOST_LOGIN)

    def _to_pull_request(self, item: Dict[str, Any]) -> PullRequest:
        number = item.get("number")
        created_at = self._parse_datetime(item.get("created_at"))

        if number is None or created_at is None:
            raise DataValidationError(
                "GitHub pull request payload is missing required fields: "
                f"repo={self._config.repo_name}, payload={item}"
            )

        return PullRequest(
            number=int(number),
            title=str(item.get("title") or ""),
            created_at=created_at,
            author_login=self._login(item.get("user")),
            merged_at=self._parse_datetime(item.get("merged_at")),
            labels=frozenset(
                str(label["name"]) for label in item.get("labels") or [] if label.get("name")
            ),
            requested_reviewers=frozenset(
                str(reviewer["login"])
                for reviewer in item.get("requested_reviewers") or []
                if reviewer.get("login")
            ),
        )

    def list_pull_requests(self, state: str, limit: int) -> List[PullRequest]:
        """List up to ``limit`` pull requests in the given state, newest first.

        Args:
            state: ``open``, ``closed`` or ``all``.
            limit: Maximum number of pull requests to return.
        """
        items = self._get_paginated(
            "pulls",
            params={"state": state, "sort": "created", "direction": "desc"},
            limit=limit,
        )
        logger.debug(
            "Fetched pull requests",
            extra={"repo": self._config.repo_name, "state": state, "count": len(items)},
        )
        return [self._to_pull_request(item) for item in items]

    def list_reviews(self, pr_number: int) -> List[Review]:
        """List reviews for a pull request in the order GitHub returns them."""
        reviews: List[Review] = []

        for item in self._get_paginated(f"pulls/{pr_number}/reviews"):
            raw_state = str(item.get("state") or "")
            try:
                state = ReviewState(raw_state)
            except ValueError as exc:
                raise DataValidationError(
                    f"Unknown review state '{raw_state}' on pull request #{pr_number}"
                ) from exc

            reviews.append(
                Review(
                    author_login=self._login(item.get("user")),
                    state=state,
                    created_at=self._parse_datetime(item.get("submitted_at")),
                )
            )

        return reviews

    def list_contributors(self) -> List[str]:
        """List contributor logins for the repository."""
        return [
            str(item["login"])
            for item in self._get_paginated("contributors")
            if item.get("login")
        ]

    def list_files(self, pr_number: int) -> List[ChangedFile]:
        """List files changed by a pull request."""
        return [
            ChangedFile(
                filename=str(item["filename"]),
                previous_filename=item.get("previous_filename"),
            )
            for item in self._get_paginated(f"pulls/{pr_number}/files")
            if item.get("filename")
        ]

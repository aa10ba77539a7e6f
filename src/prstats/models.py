"""Domain models for GitHub pull request statistics.

These dataclasses model only the subset of API payload fields that the
statistics and reports need.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import FrozenSet, Optional, Tuple


class AnalysisType(Enum):
    """Kind of report requested on the command line."""

    OPEN = "open"
    MERGED = "merged"
    CODEREVIEW = "codereview"


class OutputFormat(Enum):
    """Encoding used for report output."""

    TEXT = "text"
    JSON = "json"


class ReviewState(Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    COMMENTED = "COMMENTED"
    DISMISSED = "DISMISSED"


@dataclass(frozen=True, slots=True)
class Review:
    """A single review left on a pull request.

    ``created_at`` is ``None`` for pending reviews, which GitHub has not
    submitted yet.
    """

    author_login: str
    state: ReviewState
    created_at: Optional[datetime]


@dataclass(frozen=True, slots=True)
class PullRequest:
    """Represents the pull request data required for statistics and reports."""

    number: int
    title: str
    created_at: datetime
    author_login: str
    merged_at: Optional[datetime] = None
    labels: FrozenSet[str] = frozenset()
    requested_reviewers: FrozenSet[str] = frozenset()
    reviews: Tuple[Review, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class ChangedFile:
    """A file touched by a pull request; ``previous_filename`` is set for renames."""

    filename: str
    previous_filename: Optional[str] = None


@dataclass(frozen=True, slots=True)
class CodeReviewEntry:
    """A closed pull request matched to a ticket for the code review report."""

    ticket: str
    pull_request: PullRequest
    reviewers: Tuple[str, ...]
    files: Tuple[ChangedFile, ...]


@dataclass(frozen=True, slots=True)
class ContributorStats:
    """Review participation counts for one contributor."""

    author_login: str
    submitted_reviews: int
    was_requested_reviews: int


@dataclass(frozen=True, slots=True)
class DurationPair:
    """Time-to-first-review and time-to-merge for one statistic (avg, min or max)."""

    first_review: Optional[timedelta]
    merge: timedelta


@dataclass(frozen=True, slots=True)
class DurationSummary:
    """Aggregated average/min/max durations over a set of merged pull requests."""

    average: DurationPair
    minimum: DurationPair
    maximum: DurationPair
    merged_count: int
    reviewed_count: int

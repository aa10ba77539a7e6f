"""Statistics and duration helpers for pull request reporting.

This module provides:
- Per-PR durations: time to merge and time to first non-pending review.
- The merged-PR filter policy (merged and not labeled for exclusion).
- Average/min/max aggregation over merged pull requests.
- Per-contributor review participation tallies.
- Day/hour/minute decomposition of durations for text output.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable, List, Optional, Sequence, Tuple, cast

from .models import (
    ContributorStats,
    DurationPair,
    DurationSummary,
    PullRequest,
    ReviewState,
)

EXCLUDE_LABEL = "exclude-from-analysis"

_ONE_SECOND = timedelta(seconds=1)


def filter_merged(prs: Iterable[PullRequest]) -> List[PullRequest]:
    """Keep pull requests that were merged and are not labeled ``exclude-from-analysis``."""
    return [pr for pr in prs if pr.merged_at is not None and EXCLUDE_LABEL not in pr.labels]


def time_to_merge(pr: PullRequest) -> Optional[timedelta]:
    """Return ``merged_at - created_at``, or ``None`` for unmerged pull requests."""
    if pr.merged_at is None:
        return None
    return pr.merged_at - pr.created_at


def time_to_first_review(pr: PullRequest) -> Optional[timedelta]:
    """Return the delay between PR creation and its earliest non-pending review.

    Pending reviews, and reviews without a timestamp, never qualify. ``None``
    means the PR has no qualifying review and must be left out of the
    first-review statistic rather than counted as zero.
    """
    submitted = [
        review.created_at
        for review in pr.reviews
        if review.state is not ReviewState.PENDING and review.created_at is not None
    ]
    if not submitted:
        return None
    return min(submitted) - pr.created_at


def _whole_seconds(duration: timedelta) -> int:
    return duration // _ONE_SECOND


def _truncate(duration: timedelta) -> timedelta:
    return timedelta(seconds=_whole_seconds(duration))


def average_duration(durations: Sequence[timedelta]) -> Optional[timedelta]:
    """Average whole seconds over ``durations``, truncated to whole seconds.

    Returns ``None`` for an empty sequence.
    """
    if not durations:
        return None
    total = sum(_whole_seconds(duration) for duration in durations)
    return timedelta(seconds=total // len(durations))


def summarize_durations(merged_prs: Sequence[PullRequest]) -> Optional[DurationSummary]:
    """Reduce merged pull requests to average/min/max time to first review and merge.

    The two metrics are aggregated independently: every PR contributes a merge
    duration, only PRs with a qualifying review contribute a first-review
    duration. When none do, the first-review side of each pair is ``None``.
    Every sample is truncated to whole seconds before aggregation.

    Args:
        merged_prs: Pull requests already passed through :func:`filter_merged`.

    Returns:
        A ``DurationSummary``, or ``None`` when ``merged_prs`` is empty.
    """
    merge_durations: List[timedelta] = []
    review_durations: List[timedelta] = []

    for pr in merged_prs:
        merge = time_to_merge(pr)
        if merge is None:
            continue
        merge_durations.append(_truncate(merge))

        first_review = time_to_first_review(pr)
        if first_review is not None:
            review_durations.append(_truncate(first_review))

    if not merge_durations:
        return None

    average_merge = cast(timedelta, average_duration(merge_durations))

    return DurationSummary(
        average=DurationPair(first_review=average_duration(review_durations), merge=average_merge),
        minimum=DurationPair(
            first_review=min(review_durations, default=None),
            merge=min(merge_durations),
        ),
        maximum=DurationPair(
            first_review=max(review_durations, default=None),
            merge=max(merge_durations),
        ),
        merged_count=len(merge_durations),
        reviewed_count=len(review_durations),
    )


def unique_logins(logins: Iterable[str]) -> List[str]:
    """Deduplicate logins case-insensitively, keeping the first spelling and order."""
    seen = set()
    result: List[str] = []
    for login in logins:
        key = login.casefold()
        if key in seen:
            continue
        seen.add(key)
        result.append(login)
    return result


def tally_contributors(
    contributors: Sequence[str],
    prs: Sequence[PullRequest],
) -> List[ContributorStats]:
    """Count, per contributor, the PRs they reviewed and the PRs that requested them.

    Logins match exactly but case-insensitively. A contributor who left several
    reviews on one PR counts that PR once; pending reviews are not counted.
    Results follow the (deduplicated) input order.
    """
    reviewers_per_pr = [
        {
            review.author_login.casefold()
            for review in pr.reviews
            if review.state is not ReviewState.PENDING
        }
        for pr in prs
    ]
    requested_per_pr = [
        {login.casefold() for login in pr.requested_reviewers} for pr in prs
    ]

    stats: List[ContributorStats] = []
    for login in unique_logins(contributors):
        key = login.casefold()
        stats.append(
            ContributorStats(
                author_login=login,
                submitted_reviews=sum(1 for reviewers in reviewers_per_pr if key in reviewers),
                was_requested_reviews=sum(1 for requested in requested_per_pr if key in requested),
            )
        )

    return stats


def decompose_duration(duration: timedelta) -> Tuple[int, int, int]:
    """Split a duration into whole days, remaining hours and remaining minutes (truncated)."""
    total_seconds = max(0, _whole_seconds(duration))
    days, remainder = divmod(total_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    return days, hours, remainder // 60


def format_duration(duration: Optional[timedelta]) -> str:
    """Format a duration as ``D days, H hours, M minutes`` (``n/a`` when missing)."""
    if duration is None:
        return "n/a"
    days, hours, minutes = decompose_duration(duration)
    return f"{days} days, {hours} hours, {minutes} minutes"


def format_days_hours(duration: timedelta) -> str:
    """Format a duration as ``D days, H hours``, dropping minutes."""
    days, hours, _ = decompose_duration(duration)
    return f"{days} days, {hours} hours"


def to_seconds(duration: Optional[timedelta]) -> Optional[int]:
    """Whole seconds of ``duration``, or ``None`` when missing."""
    if duration is None:
        return None
    return _whole_seconds(duration)

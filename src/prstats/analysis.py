"""Data collection for pull request reports.

This module gathers what each report needs from the GitHub client:
- merged pull requests (filtered, with their reviews attached)
- per-contributor review tallies
- open pull requests
- closed pull requests matched to tickets for the code review report
"""

from __future__ import annotations

import dataclasses
import logging
from typing import List, Optional, Sequence

from .github_client import GitHubClient
from .models import CodeReviewEntry, ContributorStats, PullRequest
from .stats import filter_merged, tally_contributors

logger = logging.getLogger(__name__)


def with_reviews(github_client: GitHubClient, pr: PullRequest) -> PullRequest:
    """Return a copy of ``pr`` carrying its reviews."""
    reviews = github_client.list_reviews(pr.number)
    return dataclasses.replace(pr, reviews=tuple(reviews))


def collect_merged_pull_requests(github_client: GitHubClient, limit: int) -> List[PullRequest]:
    """Fetch up to ``limit`` closed pull requests and keep the merged, non-excluded ones.

    Reviews are only fetched for pull requests that survive the filter.
    """
    closed = github_client.list_pull_requests(state="closed", limit=limit)
    merged = filter_merged(closed)

    logger.info(
        "Gathering time to first review durations...",
        extra={"prs_closed": len(closed), "prs_merged": len(merged)},
    )

    return [with_reviews(github_client, pr) for pr in merged]


def collect_contributor_stats(
    github_client: GitHubClient,
    prs: Sequence[PullRequest],
) -> List[ContributorStats]:
    """Tally review participation for every repository contributor."""
    logger.info("Gathering individual contributor statistics...")
    contributors = github_client.list_contributors()
    stats = tally_contributors(contributors, prs)

    logger.debug(
        "Collected contributor statistics",
        extra={"contributors": len(stats), "prs_total": len(prs)},
    )

    return stats


def collect_open_pull_requests(github_client: GitHubClient, limit: int) -> List[PullRequest]:
    return github_client.list_pull_requests(state="open", limit=limit)


def match_ticket(title: str, tickets: Sequence[str]) -> Optional[str]:
    """Return the first ticket contained in ``title`` (case-insensitive), if any."""
    lowered = title.casefold()
    for ticket in tickets:
        if ticket.casefold() in lowered:
            return ticket
    return None


def collect_code_review_entries(
    github_client: GitHubClient,
    tickets: Sequence[str],
    limit: int,
) -> List[CodeReviewEntry]:
    """Find closed pull requests whose title mentions one of ``tickets``.

    For each match the reviewer logins (in review order, deduplicated) and the
    changed files are fetched.
    """
    logger.info(
        "Gathering PRs, finding authors and changed files for list %s...",
        ", ".join(tickets),
    )

    entries: List[CodeReviewEntry] = []
    for pr in github_client.list_pull_requests(state="closed", limit=limit):
        ticket = match_ticket(pr.title, tickets)
        if ticket is None:
            continue

        reviewers = list(
            dict.fromkeys(review.author_login for review in github_client.list_reviews(pr.number))
        )
        entries.append(
            CodeReviewEntry(
                ticket=ticket,
                pull_request=pr,
                reviewers=tuple(reviewers),
                files=tuple(github_client.list_files(pr.number)),
            )
        )

    return entries

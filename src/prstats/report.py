"""Text and JSON renderings of pull request reports.

Every function here is stateless: it takes the aggregate data as arguments
and returns the full output string.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from .models import (
    ChangedFile,
    CodeReviewEntry,
    ContributorStats,
    DurationPair,
    DurationSummary,
    PullRequest,
)
from .stats import format_days_hours, format_duration, to_seconds

NO_MERGED_DATA = "No merged pull requests found; no data to analyze."
NO_OPEN_DATA = "No open pull requests found."
NO_CODE_REVIEW_DATA = "No closed pull requests matched the requested tickets."


def _merge_stat_lines(prefix: str, pair: DurationPair) -> List[str]:
    return [
        f"{prefix} Time to First Review: {format_duration(pair.first_review)}.",
        f"{prefix} Time to Merge: {format_duration(pair.merge)}.",
    ]


def render_merged_text(
    summary: Optional[DurationSummary],
    contributor_stats: Sequence[ContributorStats] = (),
) -> str:
    """Render merged-PR statistics as human-readable lines.

    Contributors with neither submitted nor requested reviews are omitted.
    """
    if summary is None:
        return NO_MERGED_DATA

    lines = [
        f"Merged PRs analyzed: {summary.merged_count} "
        f"({summary.reviewed_count} with a submitted review)",
    ]
    lines.extend(_merge_stat_lines("Average", summary.average))
    lines.extend(_merge_stat_lines("Max", summary.maximum))
    lines.extend(_merge_stat_lines("Min", summary.minimum))

    for stats in contributor_stats:
        if stats.submitted_reviews == 0 and stats.was_requested_reviews == 0:
            continue
        lines.append(
            f"Name: {stats.author_login} "
            f"- Submitted Reviews: {stats.submitted_reviews} "
            f"- Was Requested Review: {stats.was_requested_reviews}"
        )

    return "\n".join(lines)


def _pair_to_dict(pair: DurationPair) -> Dict[str, Optional[int]]:
    return {"firstReview": to_seconds(pair.first_review), "merge": to_seconds(pair.merge)}


def merged_report_data(
    summary: Optional[DurationSummary],
    contributor_stats: Sequence[ContributorStats] = (),
) -> Dict[str, Any]:
    """Build the JSON-ready mapping for merged-PR statistics.

    Durations are integer seconds. With no merged pull requests the mapping
    only carries ``noData`` and no average/min/max.
    """
    individual_stats = [
        {
            "name": stats.author_login,
            "submittedReviews": stats.submitted_reviews,
            "wasRequestedReviews": stats.was_requested_reviews,
        }
        for stats in contributor_stats
    ]

    if summary is None:
        return {"noData": True, "individualStats": individual_stats}

    return {
        "average": _pair_to_dict(summary.average),
        "max": _pair_to_dict(summary.maximum),
        "min": _pair_to_dict(summary.minimum),
        "individualStats": individual_stats,
    }


def encode_merged_json(
    summary: Optional[DurationSummary],
    contributor_stats: Sequence[ContributorStats] = (),
) -> str:
    return json.dumps(merged_report_data(summary, contributor_stats))


def render_open_text(prs: Sequence[PullRequest], now: Optional[datetime] = None) -> str:
    """Render how long each open pull request has been open.

    ``now`` defaults to the current UTC time, so repeated calls age the PRs.
    """
    if not prs:
        return NO_OPEN_DATA

    current = now or datetime.now(timezone.utc)
    return "\n".join(
        f"PR: {pr.number} {pr.title} has been open for "
        f"{format_days_hours(current - pr.created_at)}."
        for pr in prs
    )


def encode_open_json(prs: Sequence[PullRequest]) -> str:
    """Encode open pull requests with their creation time as epoch seconds."""
    return json.dumps(
        [
            {
                "number": pr.number,
                "title": pr.title,
                "createdAt": int(pr.created_at.timestamp()),
            }
            for pr in prs
        ]
    )


def _file_label(changed_file: ChangedFile) -> str:
    if changed_file.previous_filename:
        return f"{changed_file.previous_filename} -> {changed_file.filename}"
    return changed_file.filename


def render_code_review_text(entries: Sequence[CodeReviewEntry]) -> str:
    if not entries:
        return NO_CODE_REVIEW_DATA

    blocks = []
    for entry in entries:
        lines = [
            f"Ticket: {entry.ticket}",
            f"Reviewers: {', '.join(entry.reviewers)}",
            "Files Changed:",
        ]
        lines.extend(_file_label(changed_file) for changed_file in entry.files)
        lines.append("====================")
        blocks.append("\n".join(lines))

    return "\n".join(blocks)


def encode_code_review_json(entries: Sequence[CodeReviewEntry]) -> str:
    return json.dumps(
        [
            {
                "ticket": entry.ticket,
                "number": entry.pull_request.number,
                "reviewers": list(entry.reviewers),
                "filesChanged": [_file_label(changed_file) for changed_file in entry.files],
            }
            for entry in entries
        ]
    )

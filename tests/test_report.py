"""Tests for text and JSON report rendering."""

import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from prstats.models import (
    ChangedFile,
    CodeReviewEntry,
    ContributorStats,
    DurationPair,
    DurationSummary,
    PullRequest,
)
from prstats.report import (
    NO_MERGED_DATA,
    NO_OPEN_DATA,
    encode_code_review_json,
    encode_merged_json,
    encode_open_json,
    render_code_review_text,
    render_merged_text,
    render_open_text,
)

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def _summary(first_review_avg: timedelta | None = timedelta(hours=3)) -> DurationSummary:
    return DurationSummary(
        average=DurationPair(first_review=first_review_avg, merge=timedelta(days=1, hours=2, minutes=3)),
        minimum=DurationPair(first_review=timedelta(minutes=30), merge=timedelta(hours=4)),
        maximum=DurationPair(first_review=timedelta(days=2), merge=timedelta(days=5)),
        merged_count=4,
        reviewed_count=3,
    )


def _open_pr(number: int, created_at: datetime, title: str = "Add feature") -> PullRequest:
    return PullRequest(number=number, title=title, created_at=created_at, author_login="author")


def test_render_merged_text_contains_all_statistics():
    """Verify the text report lists average, max and min for both metrics."""
    report = render_merged_text(_summary())

    assert "Average Time to First Review: 0 days, 3 hours, 0 minutes." in report
    assert "Average Time to Merge: 1 days, 2 hours, 3 minutes." in report
    assert "Max Time to Merge: 5 days, 0 hours, 0 minutes." in report
    assert "Min Time to First Review: 0 days, 0 hours, 30 minutes." in report
    assert "Merged PRs analyzed: 4 (3 with a submitted review)" in report


def test_render_merged_text_omits_inactive_contributors():
    """Verify contributor lines skip people with no submitted or requested reviews."""
    stats = [
        ContributorStats(author_login="alice", submitted_reviews=2, was_requested_reviews=1),
        ContributorStats(author_login="bob", submitted_reviews=0, was_requested_reviews=0),
    ]

    report = render_merged_text(_summary(), stats)

    assert "Name: alice - Submitted Reviews: 2 - Was Requested Review: 1" in report
    assert "bob" not in report


def test_render_merged_text_reports_no_data():
    """Verify an absent summary renders the no-data message only."""
    assert render_merged_text(None) == NO_MERGED_DATA


def test_render_merged_text_missing_first_review_shows_na():
    """Verify absent first-review averages render as n/a."""
    report = render_merged_text(_summary(first_review_avg=None))

    assert "Average Time to First Review: n/a." in report


def test_encode_merged_json_structure_uses_integer_seconds():
    """Verify JSON keys and integer-second values of the merged report."""
    stats = [ContributorStats(author_login="alice", submitted_reviews=2, was_requested_reviews=1)]

    payload = json.loads(encode_merged_json(_summary(), stats))

    assert payload["average"] == {"firstReview": 3 * 3600, "merge": 86400 + 2 * 3600 + 3 * 60}
    assert payload["max"] == {"firstReview": 2 * 86400, "merge": 5 * 86400}
    assert payload["min"] == {"firstReview": 30 * 60, "merge": 4 * 3600}
    assert payload["individualStats"] == [
        {"name": "alice", "submittedReviews": 2, "wasRequestedReviews": 1}
    ]


def test_encode_merged_json_without_individual_stats_has_empty_list():
    """Verify individualStats is an empty list when no stats were requested."""
    payload = json.loads(encode_merged_json(_summary(first_review_avg=None)))

    assert payload["individualStats"] == []
    assert payload["average"]["firstReview"] is None


def test_encode_merged_json_no_data_has_no_aggregates():
    """Verify the no-data JSON carries no average/min/max values."""
    payload = json.loads(encode_merged_json(None))

    assert payload == {"noData": True, "individualStats": []}


def test_render_open_text_shows_days_and_hours():
    """Verify a PR opened 3 days 5 hours ago displays without minutes."""
    pr = _open_pr(42, NOW - timedelta(days=3, hours=5, minutes=27))

    report = render_open_text([pr], now=NOW)

    assert report == "PR: 42 Add feature has been open for 3 days, 5 hours."


def test_render_open_text_empty_reports_no_data():
    """Verify an empty open list renders the no-data message."""
    assert render_open_text([], now=NOW) == NO_OPEN_DATA


def test_encode_open_json_emits_epoch_seconds():
    """Verify open PR JSON carries creation time as epoch seconds."""
    created = datetime(2026, 1, 1, tzinfo=timezone.utc)

    payload = json.loads(encode_open_json([_open_pr(7, created, title="Fix bug")]))

    assert payload == [{"number": 7, "title": "Fix bug", "createdAt": 1767225600}]
    assert json.loads(encode_open_json([])) == []


def test_code_review_report_lists_reviewers_and_renamed_files():
    """Verify code review output includes ticket, reviewers and file renames."""
    entry = CodeReviewEntry(
        ticket="ABC-1",
        pull_request=_open_pr(9, NOW, title="ABC-1 tidy up"),
        reviewers=("alice", "bob"),
        files=(ChangedFile("src/new.py", previous_filename="src/old.py"), ChangedFile("README.md")),
    )

    text = render_code_review_text([entry])
    payload = json.loads(encode_code_review_json([entry]))

    assert "Ticket: ABC-1" in text
    assert "Reviewers: alice, bob" in text
    assert "src/old.py -> src/new.py" in text
    assert "README.md" in text
    assert payload == [
        {
            "ticket": "ABC-1",
            "number": 9,
            "reviewers": ["alice", "bob"],
            "filesChanged": ["src/old.py -> src/new.py", "README.md"],
        }
    ]

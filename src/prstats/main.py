"""Entry point for the GitHub PR statistics tool."""

from __future__ import annotations

import logging
import sys
from typing import List, Optional, Sequence

from .analysis import (
    collect_code_review_entries,
    collect_contributor_stats,
    collect_merged_pull_requests,
    collect_open_pull_requests,
)
from .cli import parse_args
from .config import Config, load_config
from .errors import ApiError, AuthenticationError, ConfigurationError, PRStatsError
from .github_client import GitHubClient
from .models import AnalysisType, ContributorStats, OutputFormat
from .report import (
    encode_code_review_json,
    encode_merged_json,
    encode_open_json,
    render_code_review_text,
    render_merged_text,
    render_open_text,
)
from .stats import summarize_durations

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_UNEXPECTED_ERROR = 1
EXIT_CONFIGURATION_ERROR = 2
EXIT_AUTHENTICATION_ERROR = 3
EXIT_API_ERROR = 4


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run_merged_analysis(github_client: GitHubClient, config: Config) -> str:
    """Compute merged-PR duration statistics and render them in the configured format."""
    if config.output_format is OutputFormat.TEXT:
        print(f"\nClosed PR Statistics (limit {config.pr_limit})\nWorking...")

    merged_prs = collect_merged_pull_requests(github_client, limit=config.pr_limit)
    summary = summarize_durations(merged_prs)

    contributor_stats: List[ContributorStats] = []
    if summary is None:
        logger.warning("No merged pull requests to analyze", extra={"repo": config.repo_name})
    elif config.include_individual_stats:
        contributor_stats = collect_contributor_stats(github_client, merged_prs)

    if config.output_format is OutputFormat.JSON:
        return encode_merged_json(summary, contributor_stats)
    return render_merged_text(summary, contributor_stats)


def run_open_analysis(github_client: GitHubClient, config: Config) -> str:
    if config.output_format is OutputFormat.TEXT:
        print("Open PRs\nWorking...")

    open_prs = collect_open_pull_requests(github_client, limit=config.pr_limit)

    if config.output_format is OutputFormat.JSON:
        return encode_open_json(open_prs)
    return render_open_text(open_prs)


def run_code_review_report(github_client: GitHubClient, config: Config) -> str:
    if config.output_format is OutputFormat.TEXT:
        print("Code Review Report PR Printout")

    entries = collect_code_review_entries(
        github_client,
        tickets=config.tickets,
        limit=config.pr_limit,
    )

    if config.output_format is OutputFormat.JSON:
        return encode_code_review_json(entries)
    return render_code_review_text(entries)


_ANALYSES = {
    AnalysisType.MERGED: run_merged_analysis,
    AnalysisType.OPEN: run_open_analysis,
    AnalysisType.CODEREVIEW: run_code_review_report,
}


def orchestrate_report(argv: Optional[Sequence[str]] = None) -> int:
    """Run the requested analysis end to end.

    Returns:
        Process exit code: ``0`` on success (including "no data"),
        ``2`` for configuration errors, ``3`` for authentication failures,
        ``4`` for GitHub API failures and ``1`` for anything unexpected.
    """
    try:
        args = parse_args(argv)
        configure_logging(verbose=args.verbose)

        config = load_config(
            repo_name=args.repo_name,
            analysis_type=args.analysis_type,
            output_format=args.output_format,
            pr_limit=args.pr_limit,
            include_individual_stats=args.individual_stats,
            tickets=args.tickets,
        )

        github_client = GitHubClient(config=config)
        logger.info(
            "Analyzing pull requests",
            extra={"repo": config.repo_name, "analysis": config.analysis_type.value},
        )

        output = _ANALYSES[config.analysis_type](github_client, config)
        print(output)
        return EXIT_SUCCESS
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return EXIT_CONFIGURATION_ERROR
    except AuthenticationError as exc:
        logger.error("Authentication error: %s", exc)
        return EXIT_AUTHENTICATION_ERROR
    except ApiError as exc:
        logger.error("GitHub API error: %s", exc)
        return EXIT_API_ERROR
    except PRStatsError as exc:
        logger.error("%s", exc)
        return EXIT_UNEXPECTED_ERROR
    except Exception:
        logger.exception("Unexpected error while generating the report")
        return EXIT_UNEXPECTED_ERROR


def main() -> None:
    sys.exit(orchestrate_report())


if __name__ == "__main__":
    main()

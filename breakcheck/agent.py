"""Review orchestration entrypoints."""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from breakcheck.context import ReviewSettings
from breakcheck.git_client import (
    GitRunner,
    collect_unstaged_changes,
    run_git,
    validate_git_repository,
)
from breakcheck.moonshot_client import request_review
from breakcheck.observability import timed
from breakcheck.prompt import build_review_request
from breakcheck.schema import ReviewOutcome, ReviewStats, ReviewStatus

logger = logging.getLogger(__name__)


def review_working_tree(
    *,
    repo_path: Path,
    client: httpx.Client,
    settings: ReviewSettings,
    runner: GitRunner = run_git,
) -> ReviewOutcome:
    """Run a breaking-change review of the unstaged changes under ``repo_path``.

    Validates the working tree, collects unstaged diffs, and only when at least
    one diff was collected renders the prompt and calls the analysis service.
    Errors from any stage propagate to the caller unchanged.
    """
    validate_git_repository(repo_path, runner=runner)

    collected = collect_unstaged_changes(repo_path, runner=runner)
    stats = ReviewStats(
        files_listed=collected.files_listed,
        files_skipped=len(collected.warnings),
    )
    if not collected.changes:
        logger.info("No unstaged changes found in %s.", repo_path)
        return ReviewOutcome(
            status=ReviewStatus.NO_CHANGES,
            warnings=list(collected.warnings),
            stats=stats,
        )

    request = build_review_request(collected.changes)
    stats.prompt_chars = len(request.user_prompt)
    stats.model_used = settings.model

    with timed() as stopwatch:
        analysis = request_review(client=client, request=request, settings=settings)
    stats.llm_calls = 1
    stats.latency_seconds_llm = stopwatch.elapsed_seconds
    logger.info(
        "Analysis of %d file(s) completed in %.2fs.",
        len(request.file_paths),
        stopwatch.elapsed_seconds,
    )

    return ReviewOutcome(
        status=ReviewStatus.OK,
        analysis=analysis,
        files_reviewed=list(request.file_paths),
        warnings=list(collected.warnings),
        stats=stats,
    )

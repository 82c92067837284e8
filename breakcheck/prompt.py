"""Prompt rendering for breaking-change analysis requests."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from breakcheck.git_client import WorkingTreeChange

SYSTEM_PROMPT = (
    "You are an expert code reviewer specializing in identifying breaking changes "
    "and potential issues in code modifications."
)

REVIEW_PREAMBLE = (
    "You are a senior code reviewer. Analyze the following git diffs to identify potential "
    "breaking changes that could affect the behavior of the software. "
    "For each change, determine:\n"
    "1. Whether it's a breaking change (yes/no)\n"
    "2. The severity (low/medium/high)\n"
    "3. What behavior might be affected\n"
    "4. Suggestions to prevent or mitigate the breaking change\n\n"
    "Please provide a structured analysis in the following format:\n"
    "## Summary\n"
    "[Overall assessment]\n\n"
    "## Detailed Analysis\n"
    "### File: [filename]\n"
    "- **Breaking Change**: [yes/no]\n"
    "- **Severity**: [low/medium/high]\n"
    "- **Impact**: [description of what might break]\n"
    "- **Suggestions**: [how to prevent/mitigate]\n\n"
    "Here are the diffs to analyze:\n\n"
)


@dataclass(frozen=True, slots=True)
class ReviewRequest:
    """Fully rendered conversation content for one analysis call."""

    system_prompt: str
    user_prompt: str
    file_paths: tuple[str, ...]


def render_change_block(change: WorkingTreeChange) -> str:
    """Render one file heading followed by its diff, embedded verbatim."""
    return f"### File: {change.file_path}\n```diff\n{change.diff_text}\n```\n\n"


def build_review_request(changes: Sequence[WorkingTreeChange]) -> ReviewRequest:
    """Render the analysis request for ``changes`` in their given order."""
    blocks = "".join(render_change_block(change) for change in changes)
    return ReviewRequest(
        system_prompt=SYSTEM_PROMPT,
        user_prompt=REVIEW_PREAMBLE + blocks,
        file_paths=tuple(change.file_path for change in changes),
    )

"""Console report rendering."""

from __future__ import annotations

from breakcheck.schema import ReviewOutcome, ReviewStatus

NO_CHANGES_MESSAGE = "No unstaged changes found in the repository."
REPORT_TITLE = "CODE REVIEW ANALYSIS"
RULE = "=" * 80


def render_console_report(outcome: ReviewOutcome) -> str:
    """Render the reviewed files and the analysis text for terminal output."""
    if outcome.status is ReviewStatus.NO_CHANGES:
        return NO_CHANGES_MESSAGE

    lines = [f"Found {len(outcome.files_reviewed)} modified file(s):"]
    lines.extend(f"  - {file_path}" for file_path in outcome.files_reviewed)
    lines.extend(["", REPORT_TITLE, RULE, outcome.analysis or "", RULE])
    return "\n".join(lines)

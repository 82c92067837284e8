"""Read-only git queries for validating a working tree and collecting unstaged diffs."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from breakcheck.errors import (
    DiffEncodingError,
    DiffListError,
    NotARepositoryError,
    ToolInvocationError,
)

GIT_EXECUTABLE = "git"
STATUS_ARGS = ("status", "--porcelain")
LIST_UNSTAGED_ARGS = ("diff", "--name-only", "--relative", "-z")
# Listed names are literal paths, not glob patterns.
FILE_DIFF_ARGS = (
    "--literal-pathspecs",
    "diff",
    "--relative",
    "--no-color",
    "--no-ext-diff",
    "--",
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GitCommandResult:
    """Raw outcome of one git invocation."""

    returncode: int
    stdout: bytes
    stderr: bytes


class GitRunner(Protocol):
    """Protocol for callables that execute git in a working directory."""

    def __call__(self, args: Sequence[str], *, cwd: Path) -> GitCommandResult:
        """Run git with ``args`` inside ``cwd``."""


@dataclass(frozen=True, slots=True)
class WorkingTreeChange:
    """Unstaged diff for one modified file."""

    file_path: str
    diff_text: str


@dataclass(frozen=True, slots=True)
class CollectedChanges:
    """Changes collected from a working tree plus files that had to be skipped."""

    changes: tuple[WorkingTreeChange, ...]
    files_listed: int
    warnings: tuple[str, ...] = field(default_factory=tuple)


def run_git(args: Sequence[str], *, cwd: Path) -> GitCommandResult:
    """Run git as a subprocess and capture its raw output."""
    completed = subprocess.run(
        [GIT_EXECUTABLE, *args],
        cwd=cwd,
        capture_output=True,
        check=False,
    )
    return GitCommandResult(
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )


def _decode_stderr(result: GitCommandResult) -> str:
    """Decode stderr for error messages, replacing invalid bytes."""
    return result.stderr.decode("utf-8", errors="replace").strip()


def validate_git_repository(repo_path: Path, *, runner: GitRunner = run_git) -> None:
    """Fail unless ``repo_path`` is the root or a subdirectory of a git working tree."""
    try:
        result = runner(STATUS_ARGS, cwd=repo_path)
    except OSError as error:
        raise ToolInvocationError(
            f"Failed to execute git status: {error}. Make sure git is installed."
        ) from error

    if result.returncode != 0:
        logger.debug("git status failed in %s: %s", repo_path, _decode_stderr(result))
        raise NotARepositoryError(str(repo_path))


def list_unstaged_files(repo_path: Path, *, runner: GitRunner = run_git) -> list[str]:
    """Return paths with unstaged modifications, relative to ``repo_path``, in git order."""
    try:
        result = runner(LIST_UNSTAGED_ARGS, cwd=repo_path)
    except OSError as error:
        raise DiffListError(
            f"Failed to get list of modified files: {error}",
            stderr=str(error),
        ) from error

    if result.returncode != 0:
        stderr = _decode_stderr(result)
        raise DiffListError(f"Failed to get git diff: {stderr}", stderr=stderr)

    try:
        listing = result.stdout.decode("utf-8")
    except UnicodeDecodeError as error:
        raise DiffEncodingError(
            "git diff --name-only produced output that is not valid UTF-8."
        ) from error

    return [name for name in listing.split("\0") if name.strip()]


def fetch_file_diff(
    repo_path: Path,
    file_path: str,
    *,
    runner: GitRunner = run_git,
) -> str | None:
    """Return the unstaged diff text for one file, or None if it cannot be retrieved."""
    try:
        result = runner((*FILE_DIFF_ARGS, file_path), cwd=repo_path)
    except OSError as error:
        logger.warning("Skipping %s: failed to run git diff (%s).", file_path, error)
        return None

    if result.returncode != 0:
        logger.warning("Skipping %s: git diff failed (%s).", file_path, _decode_stderr(result))
        return None

    try:
        return result.stdout.decode("utf-8")
    except UnicodeDecodeError:
        logger.warning("Skipping %s: diff output is not valid UTF-8.", file_path)
        return None


def collect_unstaged_changes(
    repo_path: Path,
    *,
    runner: GitRunner = run_git,
) -> CollectedChanges:
    """Collect non-empty unstaged diffs for every modified file under ``repo_path``.

    A listing failure aborts collection. A failure to fetch one file's diff only
    skips that file and records a warning.
    """
    file_paths = list_unstaged_files(repo_path, runner=runner)
    changes: list[WorkingTreeChange] = []
    warnings: list[str] = []

    for file_path in file_paths:
        diff_text = fetch_file_diff(repo_path, file_path, runner=runner)
        if diff_text is None:
            warnings.append(f"Could not retrieve diff for '{file_path}'; file skipped.")
            continue
        if not diff_text.strip():
            logger.debug("Ignoring %s: no textual diff.", file_path)
            continue
        changes.append(WorkingTreeChange(file_path=file_path, diff_text=diff_text))

    return CollectedChanges(
        changes=tuple(changes),
        files_listed=len(file_paths),
        warnings=tuple(warnings),
    )

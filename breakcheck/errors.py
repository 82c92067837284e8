"""Error taxonomy for the review pipeline."""

from __future__ import annotations


class BreakcheckError(RuntimeError):
    """Base class for errors that abort a review run."""


class NotARepositoryError(BreakcheckError):
    """Raised when the target directory is not inside a git working tree."""

    def __init__(self, path: str) -> None:
        super().__init__(f"The directory '{path}' is not a git repository.")
        self.path = path


class ToolInvocationError(BreakcheckError):
    """Raised when the git executable cannot be started."""


class DiffListError(BreakcheckError):
    """Raised when the list of modified files cannot be obtained."""

    def __init__(self, message: str, *, stderr: str) -> None:
        super().__init__(message)
        self.stderr = stderr


class DiffEncodingError(BreakcheckError):
    """Raised when git output for the file listing is not valid UTF-8."""


class ReviewTransportError(BreakcheckError):
    """Raised when the analysis service cannot be reached."""


class ReviewServiceError(BreakcheckError):
    """Raised when the analysis service answers with a non-success status."""

    def __init__(self, message: str, *, status_code: int, body: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MalformedResponseError(BreakcheckError):
    """Raised when a successful response does not match the completion shape."""


class EmptyResponseError(BreakcheckError):
    """Raised when the service returns no completions."""


class MoonshotAuthError(BreakcheckError):
    """Raised when the Moonshot API key is missing."""

class AnalysisError(Exception):
    """Base exception for all text analysis errors."""


class SubmissionError(AnalysisError):
    """Raised when the analysis service rejects an asynchronous job."""


class PollError(AnalysisError):
    """Raised when a job status check fails or the job cannot complete."""


class JobFailedError(PollError):
    """Raised when a job reaches a FAILED or STOPPED state."""


class JobTimeoutError(PollError):
    """Raised when a job does not complete before the configured deadline."""


class JobCancelledError(PollError):
    """Raised when waiting for a job is cancelled by the caller."""


class DownloadError(AnalysisError):
    """Raised when an object cannot be fetched from storage."""


class DecodeError(AnalysisError):
    """Raised when an archive, locator or JSON payload is malformed."""


class DetectionError(AnalysisError):
    """Raised when a synchronous detection call fails."""


class BranchError(AnalysisError):
    """Wraps a failure with a short label naming the stage that failed."""

    def __init__(self, label: str, cause: BaseException) -> None:
        super().__init__(f"{label}: {cause}")
        self.label = label
        self.cause = cause


def wrap(label: str, exc: BaseException) -> BranchError:
    """Annotate an error with context, chaining `exc` as its cause."""
    error = BranchError(label, exc)
    error.__cause__ = exc
    return error


class SessionError(AnalysisError):
    """Raised when an AWS session or its credentials cannot be created."""

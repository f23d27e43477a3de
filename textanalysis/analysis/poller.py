import threading
import time

from textanalysis.analysis.client_base import BaseAnalysisClient
from textanalysis.analysis.exceptions import (
    JobCancelledError,
    JobFailedError,
    JobTimeoutError,
    PollError,
)
from textanalysis.analysis.models import AnalysisKind, AsyncJobHandle, JobStatus
from textanalysis.logging.logger import Log


class JobPoller:
    """Submit a detection job, then poll: sleep -> describe -> check status."""

    def __init__(
        self,
        client: BaseAnalysisClient,
        *,
        input_bucket: str,
        output_bucket: str,
        output_prefixes: dict[AnalysisKind, str],
        poll_interval_seconds: float,
    ) -> None:
        self._client = client
        self._input_bucket = input_bucket
        self._output_bucket = output_bucket
        self._output_prefixes = output_prefixes
        self._poll_interval_seconds = poll_interval_seconds

    def submit(self, kind: AnalysisKind, document_key: str) -> AsyncJobHandle:
        """Start a detection job reading the document straight from storage."""
        output_prefix = self._output_prefixes[kind]
        job_id = self._client.start_job(
            kind,
            input_uri=f"s3://{self._input_bucket}/{document_key}",
            output_uri=f"s3://{self._output_bucket}/{output_prefix}",
        )
        Log.info(f"Submitted {kind.value} job {job_id} for {document_key}")
        return AsyncJobHandle(job_id=job_id, kind=kind)

    def await_completion(
        self,
        handle: AsyncJobHandle,
        cancel_event: threading.Event | None = None,
        timeout_seconds: float | None = None,
    ) -> str:
        """Block until the job completes and return its output URI.

        With no `timeout_seconds` the wait is unbounded. Setting `cancel_event`
        interrupts the sleep between polls.

        Raises:
            PollError: if a status call fails.
            JobFailedError: if the job ends FAILED or STOPPED.
            JobTimeoutError: if the deadline passes first.
            JobCancelledError: if `cancel_event` is set.
        """
        deadline = None if timeout_seconds is None else time.monotonic() + timeout_seconds
        while True:
            self._sleep(handle, cancel_event)
            status, output_uri = self._client.describe_job(handle.kind, handle.job_id)
            handle.status = status
            Log.info(f"{handle.kind.value} job {handle.job_id}: {status.value}")

            if status is JobStatus.COMPLETED:
                if not output_uri:
                    raise PollError(f"Job {handle.job_id} completed without an output location")
                handle.output_uri = output_uri
                return output_uri
            if status.is_terminal:
                raise JobFailedError(f"Job {handle.job_id} finished with status {status.value}")
            if deadline is not None and time.monotonic() >= deadline:
                raise JobTimeoutError(
                    f"Job {handle.job_id} did not complete within {timeout_seconds} seconds"
                )

    def _sleep(self, handle: AsyncJobHandle, cancel_event: threading.Event | None) -> None:
        if cancel_event is None:
            time.sleep(self._poll_interval_seconds)
            return
        if cancel_event.wait(self._poll_interval_seconds):
            raise JobCancelledError(f"Waiting for job {handle.job_id} was cancelled")

from abc import ABC, abstractmethod

from textanalysis.analysis.models import AnalysisKind, JobStatus


class BaseAnalysisClient(ABC):
    """Contract for NLP analysis service adapters."""

    @abstractmethod
    def detect_sentiment(self, text: str) -> float:
        """Return the negative sentiment score (0.0-1.0) for a single text.

        Raises:
            DetectionError: on any service failure.
        """

    @abstractmethod
    def batch_detect_entities(self, text: str) -> list[dict[str, str]]:
        """Return raw entities as dicts with "Text" and "Type" keys.

        Raises:
            DetectionError: on any service failure.
        """

    @abstractmethod
    def batch_detect_key_phrases(self, text: str) -> list[dict[str, str]]:
        """Return raw key phrases as dicts with a "Text" key.

        Raises:
            DetectionError: on any service failure.
        """

    @abstractmethod
    def start_job(self, kind: AnalysisKind, *, input_uri: str, output_uri: str) -> str:
        """Submit an asynchronous detection job and return its id.

        Raises:
            SubmissionError: if the service rejects the request.
        """

    @abstractmethod
    def describe_job(self, kind: AnalysisKind, job_id: str) -> tuple[JobStatus, str | None]:
        """Return the job status and, once completed, its output URI.

        Raises:
            PollError: if the status call itself fails.
        """

"""Asynchronous job path: submit -> poll -> fetch -> unpack -> parse."""

import json
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar
from urllib.parse import urlparse

from textanalysis.analysis.archive import extract_first_entry
from textanalysis.analysis.exceptions import DecodeError, wrap
from textanalysis.analysis.models import AnalysisKind, AsyncJobHandle
from textanalysis.analysis.poller import JobPoller
from textanalysis.logging.logger import Log
from textanalysis.storage.base import BaseObjectStorage

RESULT_FIELDS: dict[AnalysisKind, str] = {
    AnalysisKind.ENTITIES: "Entities",
    AnalysisKind.KEY_PHRASES: "KeyPhrases",
}


def parse_s3_uri(uri: str) -> tuple[str, str]:
    """Split `s3://bucket/key` into bucket and key."""
    parsed = urlparse(uri)
    key = parsed.path.lstrip("/")
    if parsed.scheme != "s3" or not parsed.netloc or not key:
        raise DecodeError(f"Invalid output location: {uri!r}")
    return parsed.netloc, key


def parse_job_output(content: bytes, result_field: str) -> list[dict[str, Any]]:
    """Collect `result_field` items from a JSON-lines job output document."""
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Job output is not UTF-8: {exc}") from exc

    records: list[dict[str, Any]] = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            document = json.loads(line)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"Invalid JSON on line {line_number}: {exc}") from exc
        if not isinstance(document, dict):
            raise DecodeError(f"Line {line_number} must be a JSON object")
        items = document.get(result_field) or []
        if not isinstance(items, list):
            raise DecodeError(f"'{result_field}' on line {line_number} must be a list")
        records.extend(items)
    return records


@dataclass(slots=True)
class JobPipelineContext:
    kind: AnalysisKind
    document_key: str
    cancel_event: threading.Event | None = None
    handle: AsyncJobHandle | None = None
    output_uri: str = ""
    output_bucket: str = ""
    output_key: str = ""
    archive_bytes: bytes = b""
    content: bytes = b""
    records: list[dict[str, Any]] = field(default_factory=list)


class JobPipelineStep(ABC):
    label: ClassVar[str]

    def describe(self, kind: AnalysisKind) -> str:
        return self.label.format(kind=kind.value)

    @abstractmethod
    def run(self, context: JobPipelineContext) -> JobPipelineContext:
        raise NotImplementedError


class SubmitJobStep(JobPipelineStep):
    label = "Unable to start {kind} job"

    def __init__(self, poller: JobPoller) -> None:
        self._poller = poller

    def run(self, context: JobPipelineContext) -> JobPipelineContext:
        context.handle = self._poller.submit(context.kind, context.document_key)
        return context


class AwaitJobStep(JobPipelineStep):
    label = "Unable to get {kind} output path"

    def __init__(
        self,
        poller: JobPoller,
        timeout_seconds: float | None = None,
    ) -> None:
        self._poller = poller
        self._timeout_seconds = timeout_seconds

    def run(self, context: JobPipelineContext) -> JobPipelineContext:
        if context.handle is None:
            raise ValueError("JobPipelineContext.handle must be set before polling")
        context.output_uri = self._poller.await_completion(
            context.handle,
            cancel_event=context.cancel_event,
            timeout_seconds=self._timeout_seconds,
        )
        context.output_bucket, context.output_key = parse_s3_uri(context.output_uri)
        return context


class DownloadOutputStep(JobPipelineStep):
    label = "Unable to download {kind} output"

    def __init__(self, storage: BaseObjectStorage) -> None:
        self._storage = storage

    def run(self, context: JobPipelineContext) -> JobPipelineContext:
        context.archive_bytes = self._storage.download(context.output_bucket, context.output_key)
        Log.info(f"Downloaded {len(context.archive_bytes)} bytes of {context.kind.value} output")
        return context


class UnpackOutputStep(JobPipelineStep):
    label = "Unable to unpack {kind} output"

    def run(self, context: JobPipelineContext) -> JobPipelineContext:
        context.content = extract_first_entry(context.archive_bytes)
        return context


class ParseOutputStep(JobPipelineStep):
    label = "Unable to parse {kind} output"

    def run(self, context: JobPipelineContext) -> JobPipelineContext:
        context.records = parse_job_output(context.content, RESULT_FIELDS[context.kind])
        Log.info(f"Parsed {len(context.records)} {context.kind.value} records from job output")
        return context


class JobPipeline:
    """Runs the job steps in order; the first failure aborts the pipeline."""

    def __init__(self, steps: list[JobPipelineStep]) -> None:
        self._steps = steps

    def run(
        self,
        kind: AnalysisKind,
        document_key: str,
        cancel_event: threading.Event | None = None,
    ) -> list[dict[str, Any]]:
        context = JobPipelineContext(
            kind=kind, document_key=document_key, cancel_event=cancel_event
        )
        for step in self._steps:
            try:
                context = step.run(context)
            except Exception as exc:
                raise wrap(step.describe(kind), exc) from exc
        return context.records

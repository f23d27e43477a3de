import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any, TypeVar

from textanalysis.analysis.categorize import (
    categorize_entities,
    entities_from_records,
    key_phrases_from_records,
    unique_key_phrases,
)
from textanalysis.analysis.client_base import BaseAnalysisClient
from textanalysis.analysis.exceptions import wrap
from textanalysis.analysis.job_pipeline import JobPipeline
from textanalysis.analysis.models import (
    AnalysisKind,
    AnalysisResult,
    AnalysisResultBuilder,
    CategorizedEntities,
    KeyPhrase,
    ProcessingPath,
    SentimentFinding,
)
from textanalysis.analysis.multi_error import MultiError, MultiErrorBuilder
from textanalysis.analysis.router import select_path
from textanalysis.analysis.sentiment import SentimentAnalyzer
from textanalysis.logging.logger import Log

T = TypeVar("T")


class TextAnalyzer:
    """Runs sentiment, entity and key phrase analysis concurrently.

    Each analysis runs on its own worker thread. A failing analysis records
    its error and leaves its report sections unset; the others carry on.
    """

    def __init__(
        self,
        *,
        client: BaseAnalysisClient,
        job_pipeline: JobPipeline,
        sentiment_analyzer: SentimentAnalyzer,
    ) -> None:
        self._client = client
        self._job_pipeline = job_pipeline
        self._sentiment_analyzer = sentiment_analyzer

    def run(
        self,
        data_source_id: str,
        document_bytes: bytes,
        cancel_event: threading.Event | None = None,
    ) -> tuple[AnalysisResult, MultiError | None]:
        """Analyse a document and return the merged result with any combined error."""
        Log.info(f"Beginning text analysis of {data_source_id}")
        text = document_bytes.decode("utf-8", errors="replace")
        paths = {kind: select_path(kind, document_bytes) for kind in AnalysisKind}

        builder = AnalysisResultBuilder(data_source=data_source_id)
        errors = MultiErrorBuilder()
        lock = threading.Lock()

        def sentiment() -> list[SentimentFinding]:
            return self._sentiment_analyzer.analyse(text)

        def entities() -> CategorizedEntities:
            return self._analyse_entities(
                data_source_id, text, paths[AnalysisKind.ENTITIES], cancel_event
            )

        def key_phrases() -> list[KeyPhrase]:
            return self._analyse_key_phrases(
                data_source_id, text, paths[AnalysisKind.KEY_PHRASES], cancel_event
            )

        with ThreadPoolExecutor(max_workers=3, thread_name_prefix="analysis") as pool:
            futures = [
                pool.submit(
                    self._run_branch,
                    AnalysisKind.SENTIMENT,
                    sentiment,
                    _apply_sentiment,
                    builder,
                    lock,
                    errors,
                ),
                pool.submit(
                    self._run_branch,
                    AnalysisKind.ENTITIES,
                    entities,
                    _apply_entities,
                    builder,
                    lock,
                    errors,
                ),
                pool.submit(
                    self._run_branch,
                    AnalysisKind.KEY_PHRASES,
                    key_phrases,
                    _apply_key_phrases,
                    builder,
                    lock,
                    errors,
                ),
            ]
            wait(futures)

        combined = errors.build()
        if combined is None:
            Log.info(f"Text analysis of {data_source_id} complete")
        else:
            Log.warning(
                f"Text analysis of {data_source_id} finished with {len(combined)} failure(s)"
            )
        return builder.build(), combined

    @staticmethod
    def _run_branch(
        kind: AnalysisKind,
        analyse: Callable[[], T],
        apply: Callable[[AnalysisResultBuilder, T], None],
        builder: AnalysisResultBuilder,
        lock: threading.Lock,
        errors: MultiErrorBuilder,
    ) -> None:
        try:
            output = analyse()
        except Exception as exc:
            error = wrap(f"Unable to perform {kind.value} analysis", exc)
            Log.exception(str(error))
            errors.add(error)
            return
        with lock:
            apply(builder, output)
        Log.info(f"Structured {kind.value} data")

    def _analyse_entities(
        self,
        data_source_id: str,
        text: str,
        path: ProcessingPath,
        cancel_event: threading.Event | None,
    ) -> CategorizedEntities:
        records = self._detect(
            AnalysisKind.ENTITIES,
            data_source_id,
            path,
            cancel_event,
            lambda: self._client.batch_detect_entities(text),
        )
        return categorize_entities(entities_from_records(records))

    def _analyse_key_phrases(
        self,
        data_source_id: str,
        text: str,
        path: ProcessingPath,
        cancel_event: threading.Event | None,
    ) -> list[KeyPhrase]:
        records = self._detect(
            AnalysisKind.KEY_PHRASES,
            data_source_id,
            path,
            cancel_event,
            lambda: self._client.batch_detect_key_phrases(text),
        )
        return unique_key_phrases(key_phrases_from_records(records))

    def _detect(
        self,
        kind: AnalysisKind,
        data_source_id: str,
        path: ProcessingPath,
        cancel_event: threading.Event | None,
        detect_sync: Callable[[], list[dict[str, Any]]],
    ) -> list[dict[str, Any]]:
        if path is ProcessingPath.ASYNC:
            return self._job_pipeline.run(kind, data_source_id, cancel_event=cancel_event)
        try:
            return detect_sync()
        except Exception as exc:
            raise wrap(f"Unable to detect {kind.value}", exc) from exc


def _apply_sentiment(builder: AnalysisResultBuilder, findings: list[SentimentFinding]) -> None:
    builder.top_negative_sentiment = findings


def _apply_entities(builder: AnalysisResultBuilder, entities: CategorizedEntities) -> None:
    builder.people = entities.people
    builder.places = entities.places
    builder.dates = entities.dates
    builder.organisations = entities.organisations


def _apply_key_phrases(builder: AnalysisResultBuilder, key_phrases: list[KeyPhrase]) -> None:
    builder.key_phrases = key_phrases

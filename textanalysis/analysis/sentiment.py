"""Sentence-level sentiment scoring with three-sentence context windows."""

from collections.abc import Sequence

from textanalysis.analysis.client_base import BaseAnalysisClient
from textanalysis.analysis.exceptions import DetectionError
from textanalysis.analysis.models import SentimentFinding
from textanalysis.logging.logger import Log

SENTENCE_DELIMITER = ". "
MAX_FINDINGS = 10
_WINDOW_SIZE = 3


def split_sentences(text: str) -> list[str]:
    return text.strip().split(SENTENCE_DELIMITER)


def surrounding_context(sentences: Sequence[str], index: int) -> str:
    """Join the three-sentence window around `index`.

    The first and last sentences borrow from the side that exists, so every
    window spans three sentences. Texts shorter than three have no context.
    """
    count = len(sentences)
    if count < _WINDOW_SIZE:
        return ""
    if index == 0:
        start = 0
    elif index == count - 1:
        start = count - _WINDOW_SIZE
    else:
        start = index - 1
    return SENTENCE_DELIMITER.join(sentences[start : start + _WINDOW_SIZE])


def rank_findings(
    findings: Sequence[SentimentFinding], limit: int = MAX_FINDINGS
) -> list[SentimentFinding]:
    """Most negative first; ties keep sentence order. At most ten are kept."""
    limit = min(limit, MAX_FINDINGS)
    ranked = sorted(findings, key=lambda finding: finding.negative_sentiment, reverse=True)
    return ranked[:limit]


class SentimentAnalyzer:
    """Scores every sentence of a document and keeps the most negative ones."""

    def __init__(self, client: BaseAnalysisClient, limit: int = MAX_FINDINGS) -> None:
        self._client = client
        self._limit = limit

    def analyse(self, text: str) -> list[SentimentFinding]:
        sentences = split_sentences(text)
        Log.info(f"Analysing {len(sentences)} sentences for sentiment")

        findings: list[SentimentFinding] = []
        for index, sentence in enumerate(sentences):
            findings.append(
                SentimentFinding(
                    sentence=sentence,
                    surrounding_sentences=surrounding_context(sentences, index),
                    negative_sentiment=self._score(sentence),
                )
            )
        return rank_findings(findings, self._limit)

    def _score(self, sentence: str) -> float:
        try:
            return self._client.detect_sentiment(sentence)
        except DetectionError:
            raise
        except Exception as exc:
            raise DetectionError(f"Unable to detect sentiment: {exc}") from exc

"""Serializes an AnalysisResult into the JSON report layout."""

import json
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from textanalysis.analysis.models import AnalysisResult, Entity, KeyPhrase, SentimentFinding
from textanalysis.logging.logger import Log


def result_to_dict(result: AnalysisResult) -> dict[str, Any]:
    """Build the report mapping. Missing or empty sections become null."""
    return {
        "DataSource": result.data_source,
        "TopNegativeSentiment": _section(result.top_negative_sentiment, _finding_to_dict),
        "People": _section(result.people, _entity_to_dict),
        "Places": _section(result.places, _entity_to_dict),
        "Dates": _section(result.dates, _entity_to_dict),
        "Organisations": _section(result.organisations, _entity_to_dict),
        "KeyPhrases": _section(result.key_phrases, _key_phrase_to_dict),
    }


def write_report(result: AnalysisResult, output_path: Path) -> None:
    Log.info(f"Writing text analysis to output file: {output_path}")
    payload = json.dumps(result_to_dict(result), indent=1, ensure_ascii=False)
    output_path.write_text(payload, encoding="utf-8")


def _section(
    items: Sequence[Any] | None, convert: Callable[[Any], dict[str, Any]]
) -> list[dict[str, Any]] | None:
    if not items:
        return None
    return [convert(item) for item in items]


def _finding_to_dict(finding: SentimentFinding) -> dict[str, Any]:
    return {
        "Sentence": finding.sentence,
        "SurroundingSentences": finding.surrounding_sentences,
        "NegativeSentiment": finding.negative_sentiment,
    }


def _entity_to_dict(entity: Entity) -> dict[str, str]:
    return {"Text": entity.text, "Type": entity.type}


def _key_phrase_to_dict(key_phrase: KeyPhrase) -> dict[str, str]:
    return {"Text": key_phrase.text}

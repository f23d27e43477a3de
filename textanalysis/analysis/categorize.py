"""Buckets raw detector output into report sections."""

from collections.abc import Iterable

from textanalysis.analysis.dedup import unique_by_text
from textanalysis.analysis.exceptions import DecodeError
from textanalysis.analysis.models import CategorizedEntities, Entity, EntityCategory, KeyPhrase
from textanalysis.logging.logger import Log


def categorize_entities(entities: Iterable[Entity]) -> CategorizedEntities:
    """Split entities into people, places, dates and organisations.

    Entities with any other tag are dropped. Each bucket keeps the first
    occurrence of a given text.
    """
    buckets: dict[EntityCategory, list[Entity]] = {
        EntityCategory.PERSON: [],
        EntityCategory.LOCATION: [],
        EntityCategory.DATE: [],
        EntityCategory.ORGANIZATION: [],
    }
    ignored = 0
    for entity in entities:
        category = EntityCategory.from_tag(entity.type)
        if category is EntityCategory.IGNORED:
            ignored += 1
            continue
        buckets[category].append(Entity(text=entity.text, type=entity.type))

    Log.debug(f"Structuring entity data: {ignored} entities with other tags ignored")
    return CategorizedEntities(
        people=unique_by_text(buckets[EntityCategory.PERSON]),
        places=unique_by_text(buckets[EntityCategory.LOCATION]),
        dates=unique_by_text(buckets[EntityCategory.DATE]),
        organisations=unique_by_text(buckets[EntityCategory.ORGANIZATION]),
    )


def unique_key_phrases(key_phrases: Iterable[KeyPhrase]) -> list[KeyPhrase]:
    return unique_by_text(KeyPhrase(text=phrase.text) for phrase in key_phrases)


def entities_from_records(records: Iterable[dict[str, object]]) -> list[Entity]:
    try:
        return [Entity(text=str(r["Text"]), type=str(r["Type"])) for r in records]
    except (KeyError, TypeError) as exc:
        raise DecodeError(f"Malformed entity record: {exc}") from exc


def key_phrases_from_records(records: Iterable[dict[str, object]]) -> list[KeyPhrase]:
    try:
        return [KeyPhrase(text=str(r["Text"])) for r in records]
    except (KeyError, TypeError) as exc:
        raise DecodeError(f"Malformed key phrase record: {exc}") from exc

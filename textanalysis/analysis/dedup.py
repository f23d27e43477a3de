from collections.abc import Iterable
from typing import Protocol, TypeVar


class HasText(Protocol):
    @property
    def text(self) -> str: ...


T = TypeVar("T", bound=HasText)


def unique_by_text(items: Iterable[T]) -> list[T]:
    """Drop items whose text was already seen, keeping first-seen order."""
    seen: set[str] = set()
    unique: list[T] = []
    for item in items:
        if item.text in seen:
            continue
        seen.add(item.text)
        unique.append(item)
    return unique

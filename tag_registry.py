"""Tag bookkeeping shared by documents and the tag picker."""
from __future__ import annotations

from typing import Iterable, Iterator, List


def clean_tags(tags: Iterable[str]) -> List[str]:
    """Strip tags, drop blank ones and repeated ones, keep first-seen order."""
    seen: set[str] = set()
    cleaned: List[str] = []
    for tag in tags:
        value = tag.strip()
        if not value or value in seen:
            continue
        seen.add(value)
        cleaned.append(value)
    return cleaned


def merge(existing: Iterable[str], new: Iterable[str]) -> List[str]:
    return sorted(set(clean_tags(existing)) | set(clean_tags(new)))


class TagRegistry:
    """Sorted, de-duplicated universe of tags seen across documents."""

    def __init__(self, seed: Iterable[str] = ()):
        self._tags: List[str] = merge(seed, ())

    def merge(self, tags: Iterable[str]) -> List[str]:
        self._tags = merge(self._tags, tags)
        return list(self._tags)

    @property
    def tags(self) -> List[str]:
        return list(self._tags)

    def __contains__(self, tag: object) -> bool:
        return tag in self._tags

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._tags))

    def __len__(self) -> int:
        return len(self._tags)

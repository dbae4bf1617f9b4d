"""Title matching against a list of candidate records.

A query matches every candidate whose normalized Arabic title equals the
normalized query. Zero matches means the catalogue is missing a row, more than
one means the source data has duplicates; both are returned as-is and the
caller decides what to do.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Literal

from hadith_hub.text.normalize import normalize_title


class InvalidCandidatesError(ValueError):
    """Candidate collection is not a sequence of title records."""


def title_of(candidate: Any) -> str | None:
    """Arabic title of a candidate; None when the record has no title field.

    Accepts TitleRecord/Book models (``title_ar`` attribute) and plain dicts
    from the JSON mapping (``titleAr``) or the database (``title_ar``). A dict
    without either key has no title; anything else is not a record.
    """
    if isinstance(candidate, Mapping):
        if "titleAr" in candidate:
            return candidate["titleAr"]
        return candidate.get("title_ar")
    if not hasattr(candidate, "title_ar"):
        raise InvalidCandidatesError(f"Not a title record: {candidate!r}")
    return candidate.title_ar


def _check_sequence(candidates: Any) -> list:
    # str and dict are iterable but never a list of records
    if isinstance(candidates, (str, bytes, Mapping)) or not isinstance(candidates, Iterable):
        raise InvalidCandidatesError(
            f"Candidates must be a sequence of records, got {type(candidates).__name__}"
        )
    return list(candidates)


def find_matches(query: str | None, candidates: Iterable[Any]) -> list[Any]:
    """Return candidates whose normalized title equals the normalized query.

    Order follows ``candidates``. A record with a missing title is compared
    as ``""``, so it never aborts the scan.
    """
    key = normalize_title(query)
    return [c for c in _check_sequence(candidates) if normalize_title(title_of(c)) == key]


MatchKind = Literal["none", "unique", "ambiguous"]


def classify(matches: list[Any]) -> MatchKind:
    if not matches:
        return "none"
    if len(matches) == 1:
        return "unique"
    return "ambiguous"


class TitleIndex:
    """Normalized key → records, built once and reused across many queries.

    ``lookup`` gives the same result as ``find_matches`` over the same
    candidates, including candidate order within a key.
    """

    def __init__(self, candidates: Iterable[Any]):
        self._by_key: dict[str, list[Any]] = {}
        for c in _check_sequence(candidates):
            self._by_key.setdefault(normalize_title(title_of(c)), []).append(c)

    def __len__(self) -> int:
        return len(self._by_key)

    def __contains__(self, query: object) -> bool:
        return normalize_title(query) in self._by_key  # type: ignore[arg-type]

    def lookup(self, query: str | None) -> list[Any]:
        return list(self._by_key.get(normalize_title(query), []))

    def duplicates(self) -> dict[str, list[Any]]:
        """Titled keys shared by more than one record."""
        return {k: v for k, v in self._by_key.items() if k and len(v) > 1}

    def untitled(self) -> list[Any]:
        """Records whose title normalizes to the empty key."""
        return list(self._by_key.get("", []))

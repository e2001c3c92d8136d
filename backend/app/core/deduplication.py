"""Deduplication — fuzzy name matching and record merging for candidates, vendors, clients.

Invariants:
    - Scores are distances in [0, 1]: 0 = perfect match, 1 = no similarity
    - A record matches only when its distance is strictly below the threshold
    - Results are ordered best first (lowest distance)
    - merge_* never drops a non-empty existing value into emptiness

Design Decisions:
    - rapidfuzz token_sort_ratio on the joined key values: word order insensitive,
      so "Smith John" still matches "John Smith"
    - Distance = 1 - similarity/100 keeps the historical 0.4 threshold meaning
      "lower is stricter"
"""

from typing import Any, Iterable

from rapidfuzz import fuzz, process, utils

FUZZY_THRESHOLD = 0.4

CANDIDATE_APPEND_FIELDS = ("notes_internal",)
CANDIDATE_LIST_FIELDS = ("skills",)


def _haystack(record: dict, keys: Iterable[str]) -> str:
    return " ".join(str(record.get(k) or "") for k in keys).strip()


def fuzzy_search(
    records: list[dict],
    query: str,
    keys: Iterable[str],
    threshold: float = FUZZY_THRESHOLD,
) -> list[tuple[dict, float]]:
    """Return (record, distance) pairs with distance < threshold, best first."""
    keys = tuple(keys)
    if not query or not query.strip() or not records:
        return []

    choices = [_haystack(r, keys) for r in records]
    results = process.extract(
        query,
        choices,
        scorer=fuzz.token_sort_ratio,
        processor=utils.default_process,
        score_cutoff=(1 - threshold) * 100,
        limit=None,
    )

    matches = []
    for _, similarity, index in results:
        distance = round(1 - similarity / 100, 4)
        if distance < threshold:
            matches.append((records[index], distance))
    matches.sort(key=lambda m: m[1])
    return matches


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == []


def merge_entity_data(
    existing: dict, new: dict, append_fields: Iterable[str] = (),
) -> dict:
    """Merge `new` into a copy of `existing`.

    Empty new values are ignored, empty existing fields are filled, append
    fields are concatenated with "; " unless already contained, and all
    other fields take the newer value.
    """
    append_fields = set(append_fields)
    merged = dict(existing)
    for key, value in new.items():
        if _is_empty(value):
            continue
        current = merged.get(key)
        if _is_empty(current):
            merged[key] = value
        elif key in append_fields:
            if str(value) not in str(current):
                merged[key] = f"{current}; {value}"
        else:
            merged[key] = value
    return merged


def merge_candidate_data(existing: dict, new: dict) -> dict:
    """Candidate merge: skills are unioned, internal notes appended."""
    merged = merge_entity_data(
        existing,
        {k: v for k, v in new.items() if k not in CANDIDATE_LIST_FIELDS},
        CANDIDATE_APPEND_FIELDS,
    )
    for key in CANDIDATE_LIST_FIELDS:
        incoming = new.get(key) or []
        current = list(existing.get(key) or [])
        seen = {str(s).lower() for s in current}
        for item in incoming:
            if str(item).lower() not in seen:
                current.append(item)
                seen.add(str(item).lower())
        merged[key] = current
    return merged

"""Name filtering for the search view.

Substring matches win and keep listing order; when none exist, subsequence
matches are ranked by ``fuzzy_score``, best first.
"""

from __future__ import annotations

import os

from .model import EntryStore


def fuzzy_score(query: str, candidate: str) -> int | None:
    if not query:
        return 0
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()

    score = 0
    prev_idx = -1
    run = 0
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate_folded[idx - 1] in "_- .":
            score += 35
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return score


def filter_entry_indices(query: str, store: EntryStore) -> list[int]:
    """Return the indices of entries matching ``query``.

    An empty query matches everything. Substring hits keep listing order so
    directories stay ahead of files; fuzzy hits are ordered by score, ties
    in listing order.
    """
    total = store.total_entries()
    if not query:
        return list(range(total))

    query_folded = query.casefold()
    labels = [os.fsdecode(store.name_at(index)) for index in range(total)]
    substring_hits = [index for index, label in enumerate(labels) if query_folded in label.casefold()]
    if substring_hits:
        return substring_hits
    scored: list[tuple[int, int]] = []
    for index, label in enumerate(labels):
        score = fuzzy_score(query, label)
        if score is not None:
            scored.append((-score, index))
    scored.sort()
    return [index for _, index in scored]


__all__ = [
    "fuzzy_score",
    "filter_entry_indices",
]

from __future__ import annotations

from typing import Iterable, List

from whichport.models import Listener


def unique_sorted(records: Iterable[Listener]) -> List[Listener]:
    """Drop exact duplicates (first seen wins) and sort by ``(port, pid)``."""
    seen: set[Listener] = set()
    out: List[Listener] = []
    for rec in records:
        if rec in seen:
            continue
        seen.add(rec)
        out.append(rec)
    out.sort(key=Listener.sort_key)
    return out

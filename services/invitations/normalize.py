from __future__ import annotations


def normalize(raw_text: str) -> list[str]:
    """Split raw multi-line input into trimmed, non-empty, de-duplicated entries.

    First-seen order is kept for display.
    """
    seen: dict[str, None] = {}
    for line in (raw_text or "").splitlines():
        candidate = line.strip()
        if candidate:
            seen.setdefault(candidate, None)
    return list(seen)

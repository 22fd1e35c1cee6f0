"""Fuzzy filtering of display items by app name, window title and bundle id."""

import difflib
from typing import List

from .models import DisplayItem


def score_keyword(text_lower: str, keyword: str) -> float:
    """
    Score how well a keyword matches the search text.

    Args:
        text_lower: Lowercased, stripped search text
        keyword: Candidate keyword

    Returns:
        Score from 0 to 100
    """
    keyword_lower = keyword.lower()
    if not keyword_lower:
        return 0.0

    # Exact match (highest priority)
    if keyword_lower == text_lower:
        return 100.0
    # Starts with (high priority)
    if keyword_lower.startswith(text_lower):
        return 80.0 + (len(text_lower) / len(keyword_lower)) * 10
    # Contains (medium priority)
    if text_lower in keyword_lower:
        return 50.0 + (len(text_lower) / len(keyword_lower)) * 10
    # Fuzzy match (lower priority)
    ratio = difflib.SequenceMatcher(None, text_lower, keyword_lower).ratio()
    if ratio > 0.3:
        return ratio * 40.0
    return 0.0


def search(items: List[DisplayItem], text: str, threshold: float = 30.0) -> List[DisplayItem]:
    """
    Filter items to those matching the search text, best match first.

    Items with equal scores keep their input order, so bucket order survives
    for ties.

    Args:
        items: Display items to filter
        text: Search text
        threshold: Minimum score to keep an item

    Returns:
        Matching items, or items unchanged if text is empty
    """
    text_lower = text.lower().strip()
    if not text_lower:
        return list(items)

    scored = []
    for item in items:
        best = max((score_keyword(text_lower, k) for k in item.keywords), default=0.0)
        if best >= threshold:
            scored.append((best, item))

    scored.sort(key=lambda pair: -pair[0])
    return [item for _, item in scored]

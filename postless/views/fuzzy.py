"""
Ordered-subsequence (fuzzy) matching.

Matching and highlighting share :func:`match_positions`, so the characters
shown as matched are exactly the ones the match decision consumed.
"""

from typing import List


def match_positions(text: str, query: str) -> List[int]:
    """
    Greedy left-to-right scan of ``text`` for the characters of ``query``.

    Comparison is case-insensitive. Scanning stops once every query
    character has been consumed.

    Args:
        text: Candidate text
        query: Search query

    Returns:
        List[int]: Indexes into ``text`` of the consumed characters; shorter
        than ``query`` when the query is not a subsequence
    """
    positions: List[int] = []
    needle = [ch.lower() for ch in query]
    query_idx = 0
    for text_idx, ch in enumerate(text):
        if query_idx >= len(needle):
            break
        if ch.lower() == needle[query_idx]:
            positions.append(text_idx)
            query_idx += 1
    return positions


def fuzzy_match(text: str, query: str) -> bool:
    """True if ``query`` is a case-insensitive subsequence of ``text``. An empty query always matches."""
    if not query:
        return True
    return len(match_positions(text, query)) == len(query)

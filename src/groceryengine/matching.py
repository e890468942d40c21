"""Approximate matching of normalized ingredient names."""

from rapidfuzz.distance import Levenshtein

from groceryengine.config import get_settings

EXACT_MATCH_SCORE = 1.0


def similarity(name1: str, name2: str) -> float:
    """
    Normalized edit-distance similarity between two comparison keys.

    Computed as (max_len - distance) / max_len, where insertions,
    deletions and substitutions each cost 1. Identical strings score 1.0.
    """
    if name1 == name2:
        return EXACT_MATCH_SCORE

    max_len = max(len(name1), len(name2))
    distance = Levenshtein.distance(name1, name2)
    return (max_len - distance) / max_len


def is_similar(name1: str, name2: str, threshold: float | None = None) -> bool:
    """Check if two comparison keys refer to the same ingredient."""
    if name1 == name2:
        return True
    if threshold is None:
        threshold = get_settings().similarity_threshold
    return similarity(name1, name2) > threshold

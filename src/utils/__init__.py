"""Utilities package"""

from .text import (
    extract_keywords,
    find_best_match,
    is_valid_candidate,
    normalize_title,
    similarity_score,
)

__all__ = [
    "normalize_title",
    "extract_keywords",
    "is_valid_candidate",
    "similarity_score",
    "find_best_match",
]

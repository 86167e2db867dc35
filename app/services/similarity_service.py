"""
Text similarity scoring for plagiarism detection.

Similarity between two documents is the Jaccard coefficient of their sets of
lower-cased, whitespace-delimited tokens, expressed as a percentage. Token
order and frequency are ignored: two documents with the same vocabulary in a
different order score 100.
"""
import math
from typing import List, Optional, Set


class InvalidInputError(ValueError):
    """Raised when a caller passes a missing or malformed required argument."""


def round_half_up(value: float) -> int:
    """Round a non-negative percentage to the nearest integer, halves upwards."""
    return int(math.floor(value + 0.5))


def tokenize(text: Optional[str]) -> List[str]:
    """
    Split text into lower-cased tokens on runs of whitespace.

    Args:
        text: Document text

    Returns:
        List of tokens (empty for empty or whitespace-only text)
    """
    if text is None:
        raise InvalidInputError("text must not be None")
    if not isinstance(text, str):
        raise InvalidInputError(f"text must be a string, got {type(text).__name__}")

    return text.lower().split()


def token_set(text: Optional[str]) -> Set[str]:
    """Distinct tokens of a document."""
    return set(tokenize(text))


def jaccard_similarity(text_a: Optional[str], text_b: Optional[str]) -> float:
    """
    Unrounded similarity percentage between two documents.

    Args:
        text_a: First document
        text_b: Second document

    Returns:
        Percentage in [0.0, 100.0]; 0.0 when both documents have no tokens
    """
    tokens_a = token_set(text_a)
    tokens_b = token_set(text_b)

    union = tokens_a | tokens_b
    if not union:
        return 0.0

    intersection = tokens_a & tokens_b
    return 100.0 * len(intersection) / len(union)


def similarity(text_a: Optional[str], text_b: Optional[str]) -> int:
    """Similarity percentage between two documents, rounded for display or storage."""
    return round_half_up(jaccard_similarity(text_a, text_b))

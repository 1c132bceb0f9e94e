import re
from typing import Dict, List, Sequence

from .config import NGRAM_SIZE
from .validation import ParameterValidationError

# Anything outside ASCII letters, digits and ASCII whitespace is dropped,
# accented letters included.
_NON_WORD_CHARS = re.compile(r'[^a-zA-Z0-9\s]', re.ASCII)


def tokenize(text: str) -> List[str]:
    """
    Normalize raw document text into an ordered list of word tokens.

    The text is lower-cased, stripped of punctuation and non-ASCII
    characters, then split on whitespace. No stemming or stopword removal.

    Args:
        text: Raw text extracted from a document

    Returns:
        List of tokens in reading order (empty for blank input)
    """
    if not text:
        return []
    cleaned = _NON_WORD_CHARS.sub('', text.lower())
    return cleaned.split()


def generate_shingles(tokens: Sequence[str], n: int = NGRAM_SIZE) -> List[str]:
    """
    Slide an ``n``-token window over ``tokens`` and join each window with
    single spaces.

    Args:
        tokens: Ordered tokens of one document
        n: Window width

    Returns:
        ``max(0, len(tokens) - n + 1)`` shingles in left-to-right order

    Raises:
        ParameterValidationError: If ``n`` is smaller than 1
    """
    if n < 1:
        raise ParameterValidationError(f"Shingle size must be >= 1, got {n}", field="n", value=n)
    return [' '.join(tokens[i:i + n]) for i in range(len(tokens) - n + 1)]


def first_positions(shingles: Sequence[str]) -> Dict[str, int]:
    """Map each distinct shingle text to the index of its first occurrence."""
    positions: Dict[str, int] = {}
    for index, shingle in enumerate(shingles):
        positions.setdefault(shingle, index)
    return positions

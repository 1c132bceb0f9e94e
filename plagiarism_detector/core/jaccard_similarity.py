from typing import AbstractSet, Iterable, Union

ShingleCollection = Union[Iterable[str], AbstractSet[str]]


def jaccard_similarity(shingles_a: ShingleCollection, shingles_b: ShingleCollection) -> float:
    """
    Jaccard similarity of two shingle collections treated as sets.

    Duplicates collapse. Two empty inputs score 0.0 rather than dividing
    by zero.

    :param shingles_a: Shingles of the first document
    :param shingles_b: Shingles of the second document
    :return: ``|A & B| / |A | B|`` in [0, 1]
    """
    set_a = shingles_a if isinstance(shingles_a, (set, frozenset)) else set(shingles_a)
    set_b = shingles_b if isinstance(shingles_b, (set, frozenset)) else set(shingles_b)

    union_size = len(set_a | set_b)
    if union_size == 0:
        return 0.0
    return len(set_a & set_b) / union_size

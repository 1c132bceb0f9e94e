from typing import AbstractSet, Iterable, List, Mapping, Optional, Sequence, Tuple

from .logging_config import LoggerMixin
from .text_processing import first_positions


def _order_by_first_position(
    common_shingles: Iterable[str], positions: Mapping[str, int]
) -> List[Tuple[int, str]]:
    """
    Pair each distinct common shingle with its first index in the original
    sequence and sort ascending. Shingles the original never contains are
    dropped.
    """
    ordered = [
        (positions[shingle], shingle)
        for shingle in set(common_shingles)
        if shingle in positions
    ]
    ordered.sort()
    return ordered


def reconstruct_excerpts(
    common_shingles: Iterable[str],
    original_sequence: Sequence[str],
    positions: Optional[Mapping[str, int]] = None,
) -> List[str]:
    """
    Fuse shared shingles back into contiguous excerpts of the original text.

    Shingles at consecutive positions overlap by all but one token, so each
    one that directly follows the previous contributes only its last word.
    A gap in positions closes the current excerpt and starts a new one.

    Only the first occurrence of a repeated shingle text is considered, so a
    passage copied twice from the same source is reported once.

    :param common_shingles: Shingles shared by both documents
    :param original_sequence: Shingle sequence of the reference document
    :param positions: Optional precomputed first-position map for
        ``original_sequence``
    :return: Excerpts in reading order, one per contiguous run
    """
    if positions is None:
        positions = first_positions(original_sequence)

    ordered = _order_by_first_position(common_shingles, positions)
    if not ordered:
        return []

    excerpts = []
    last_position, first_shingle = ordered[0]
    current_excerpt = [first_shingle]

    for position, shingle in ordered[1:]:
        if position == last_position + 1:
            current_excerpt.append(shingle.rsplit(' ', 1)[-1])
        else:
            excerpts.append(' '.join(current_excerpt))
            current_excerpt = [shingle]
        last_position = position

    excerpts.append(' '.join(current_excerpt))
    return excerpts


class ExcerptReconstructor(LoggerMixin):
    """
    Builds human-readable evidence for a document pair from the shingles the
    two documents share.
    """

    def reconstruct(
        self,
        common_shingles: AbstractSet[str],
        original_sequence: Sequence[str],
        positions: Optional[Mapping[str, int]] = None,
    ) -> List[str]:
        """
        Reconstruct excerpts from ``common_shingles``, positioned against
        ``original_sequence``. See :func:`reconstruct_excerpts`.
        """
        excerpts = reconstruct_excerpts(common_shingles, original_sequence, positions)
        self.logger.debug(
            f"Reconstructed {len(excerpts)} excerpts from {len(common_shingles)} common shingles"
        )
        return excerpts

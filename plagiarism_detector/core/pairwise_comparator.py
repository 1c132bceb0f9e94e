from typing import List, Optional, Sequence, Tuple
import itertools
from concurrent.futures import ThreadPoolExecutor, as_completed

from tqdm import tqdm

from .config import MAX_EXCERPTS_TO_DISPLAY
from .document import Document, ComparisonResult
from .excerpt_reconstruction import ExcerptReconstructor
from .jaccard_similarity import jaccard_similarity
from .logging_config import LoggerMixin


class PairwiseComparator(LoggerMixin):
    """
    Compares every unordered pair of documents by shingle overlap.

    Results are always returned in ``(i, j)`` order with ``i < j`` over the
    input order, whether or not comparisons run in a thread pool.
    """

    def __init__(self,
                 threshold: float,
                 max_excerpts: Optional[int] = MAX_EXCERPTS_TO_DISPLAY,
                 max_workers: int = 1,
                 show_progress: bool = False):
        """
        Args:
            threshold: Minimum Jaccard similarity classified as overlap. Used
                as given; callers validate user input beforehand.
            max_excerpts: Display cap carried by each result (0/None = no cap)
            max_workers: Thread count for pair comparisons; 1 runs inline
            show_progress: Whether to show a tqdm progress bar
        """
        self.threshold = threshold
        self.max_excerpts = max_excerpts
        self.max_workers = max(1, max_workers)
        self.show_progress = show_progress
        self.reconstructor = ExcerptReconstructor()

    def compare_pair(self, document_a: Document, document_b: Document) -> ComparisonResult:
        """
        Score one pair and, when it meets the threshold, collect the shared
        passages positioned against ``document_a``.
        """
        similarity = jaccard_similarity(document_a.shingle_set, document_b.shingle_set)
        has_overlap = similarity >= self.threshold

        excerpts: Tuple[str, ...] = ()
        if has_overlap:
            common = document_a.shingle_set & document_b.shingle_set
            excerpts = tuple(self.reconstructor.reconstruct(
                common, document_a.shingles, document_a.shingle_positions
            ))

        self.logger.debug(
            f"{document_a.name} <-> {document_b.name}: similarity={similarity:.4f}, "
            f"overlap={has_overlap}, excerpts={len(excerpts)}"
        )
        return ComparisonResult(
            document_a=document_a,
            document_b=document_b,
            similarity=similarity,
            has_overlap=has_overlap,
            excerpts=excerpts,
            max_excerpts=self.max_excerpts,
        )

    def compare_all(self, documents: Sequence[Document]) -> List[ComparisonResult]:
        """
        Compare all ``k * (k - 1) / 2`` document pairs.

        Args:
            documents: Documents in report order

        Returns:
            One ComparisonResult per pair, ascending by first then second index
        """
        pairs = list(itertools.combinations(range(len(documents)), 2))

        with self.log_operation("compare_all", document_count=len(documents),
                                pair_count=len(pairs), threshold=self.threshold):
            if not pairs:
                self.logger.info(f"Nothing to compare for {len(documents)} document(s)")
                return []

            progress = tqdm(total=len(pairs), desc="Comparing documents", unit="pair",
                            disable=not self.show_progress, leave=False)
            try:
                if self.max_workers == 1 or len(pairs) == 1:
                    results = []
                    for i, j in pairs:
                        results.append(self.compare_pair(documents[i], documents[j]))
                        progress.update(1)
                else:
                    results = self._compare_parallel(documents, pairs, progress)
            finally:
                progress.close()

            flagged = sum(1 for result in results if result.has_overlap)
            self.logger.info(f"Compared {len(results)} pairs, {flagged} above threshold {self.threshold:.2%}")
            return results

    def _compare_parallel(self, documents: Sequence[Document],
                          pairs: List[Tuple[int, int]],
                          progress: tqdm) -> List[ComparisonResult]:
        workers = min(self.max_workers, len(pairs))
        self.logger.debug(f"Comparing {len(pairs)} pairs with {workers} workers")

        slots: List[Optional[ComparisonResult]] = [None] * len(pairs)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_slot = {
                executor.submit(self.compare_pair, documents[i], documents[j]): slot
                for slot, (i, j) in enumerate(pairs)
            }
            for future in as_completed(future_to_slot):
                slots[future_to_slot[future]] = future.result()
                progress.update(1)

        return slots


def compare_all(documents: Sequence[Document],
                threshold: float,
                max_excerpts: Optional[int] = MAX_EXCERPTS_TO_DISPLAY) -> List[ComparisonResult]:
    """Sequential all-pairs comparison with default settings."""
    return PairwiseComparator(threshold, max_excerpts=max_excerpts).compare_all(documents)

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

from .config import NGRAM_SIZE, TRUNCATION_MARKER
from .text_processing import tokenize, generate_shingles, first_positions

UNKNOWN_AUTHOR = "Unknown"
UNKNOWN_TITLE = "Untitled"


@dataclass(frozen=True)
class Document:
    """One successfully extracted source document and its shingles."""

    name: str
    path: str
    text: str
    author: Optional[str] = None
    title: Optional[str] = None
    ngram_size: int = NGRAM_SIZE

    tokens: Tuple[str, ...] = field(init=False, repr=False, compare=False)
    shingles: Tuple[str, ...] = field(init=False, repr=False, compare=False)
    shingle_set: FrozenSet[str] = field(init=False, repr=False, compare=False)
    shingle_positions: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.author is None:
            object.__setattr__(self, 'author', UNKNOWN_AUTHOR)
        if self.title is None:
            object.__setattr__(self, 'title', UNKNOWN_TITLE)

        tokens = tuple(tokenize(self.text))
        shingles = tuple(generate_shingles(tokens, self.ngram_size))
        object.__setattr__(self, 'tokens', tokens)
        object.__setattr__(self, 'shingles', shingles)
        object.__setattr__(self, 'shingle_set', frozenset(shingles))
        object.__setattr__(self, 'shingle_positions', MappingProxyType(first_positions(shingles)))

    @property
    def normalized_text(self) -> str:
        """Token stream joined by single spaces."""
        return ' '.join(self.tokens)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "author": self.author,
            "title": self.title,
            "token_count": len(self.tokens),
            "shingle_count": len(self.shingles),
        }


def cap_excerpts(excerpts: List[str], max_excerpts: Optional[int],
                 marker: str = TRUNCATION_MARKER) -> List[str]:
    """
    Limit excerpts for display, appending ``marker`` when some were cut.

    ``max_excerpts`` of ``None`` or ``0`` disables the cap.
    """
    if not max_excerpts or len(excerpts) <= max_excerpts:
        return list(excerpts)
    return list(excerpts[:max_excerpts]) + [marker]


@dataclass(frozen=True)
class ComparisonResult:
    """Outcome of comparing one unordered pair of documents."""

    document_a: Document
    document_b: Document
    similarity: float
    has_overlap: bool
    excerpts: Tuple[str, ...] = ()
    max_excerpts: Optional[int] = None

    @property
    def displayed_excerpts(self) -> List[str]:
        """Excerpts as they should be shown, capped with a truncation marker."""
        return cap_excerpts(list(self.excerpts), self.max_excerpts)

    @property
    def is_truncated(self) -> bool:
        return bool(self.max_excerpts) and len(self.excerpts) > self.max_excerpts

    @property
    def similarity_percent(self) -> float:
        return self.similarity * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_1": self.document_a.name,
            "path_1": self.document_a.path,
            "author_1": self.document_a.author,
            "title_1": self.document_a.title,
            "file_2": self.document_b.name,
            "path_2": self.document_b.path,
            "author_2": self.document_b.author,
            "title_2": self.document_b.title,
            "similarity": self.similarity,
            "has_overlap": self.has_overlap,
            "excerpt_count": len(self.excerpts),
            "excerpts": self.displayed_excerpts,
        }

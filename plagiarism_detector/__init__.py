"""
Shingle-based plagiarism detector.

Compares PDF documents pairwise by shared five-word sequences and
reports the passages they have in common.
"""

__version__ = "1.0.0"

from .core import *
from .utils import *

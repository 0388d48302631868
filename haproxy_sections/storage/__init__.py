# ==============================================
# STORAGE (parsed document + queries)
# ==============================================
#
# This package holds the classifier's output and answers
# name-based questions about it.
#
# Modules:
# --------
# - document.py     → ConfigDocument, the immutable parse result
# - block_store.py  → BlockStore: exact and substring name queries
# - diff.py         → Compare a named block between two documents
#
# ==============================================

from .document import ConfigDocument
from .block_store import BlockStore, find_exact, find_substring
from .diff import BlockDiff, diff_lines, diff_named_block

__all__ = [
    "ConfigDocument",
    "BlockStore",
    "find_exact",
    "find_substring",
    "BlockDiff",
    "diff_lines",
    "diff_named_block",
]

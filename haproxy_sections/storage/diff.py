# ==============================================
# Block diff
# ==============================================
#
# PURPOSE:
#   Compare one named frontend/backend between two parsed configs,
#   e.g. a stored snapshot and the file as it is now.
#
# DATA CLASS: BlockDiff
# ---------------------
#   - added: tuple[str, ...]     → lines only in the new block
#   - removed: tuple[str, ...]   → lines only in the old block
#
#   Lines are compared as an ordered multiset: a line repeated
#   twice in the new block and once in the old is added once.
#
# ==============================================

from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from .block_store import BlockStore
from .document import Lines


@dataclass(frozen=True)
class BlockDiff:
    added: Lines = ()
    removed: Lines = ()

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)

    def to_dict(self) -> dict:
        return {"added": list(self.added), "removed": list(self.removed)}


def _subtract(lines: Iterable[str], other: Iterable[str]) -> Lines:
    remaining = Counter(other)
    result = []
    for line in lines:
        if remaining[line] > 0:
            remaining[line] -= 1
        else:
            result.append(line)
    return tuple(result)


def diff_lines(old: Iterable[str], new: Iterable[str]) -> BlockDiff:
    old, new = list(old), list(new)
    return BlockDiff(added=_subtract(new, old), removed=_subtract(old, new))


def diff_named_block(old_store: BlockStore, new_store: BlockStore, kind: str, name: str) -> BlockDiff:
    """
    Diff the block called name between two stores.

    A block missing on either side is compared as empty.
    """
    old_lines = old_store.blocks(kind).get(name, ())
    new_lines = new_store.blocks(kind).get(name, ())
    return diff_lines(old_lines, new_lines)

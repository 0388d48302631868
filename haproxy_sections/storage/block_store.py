# ==============================================
# BlockStore
# ==============================================
#
# PURPOSE:
#   Read-only, name-based retrieval over a ConfigDocument's
#   frontend and backend blocks.
#
# MATCHING MODES:
#   - exact     → direct key lookup, returns (lines, found)
#   - substring → every block whose name contains the text
#                 (plain, case-sensitive; "" matches all)
#
# CLASS: BlockStore
# -----------------
#   Wraps one ConfigDocument. Never mutates it, so a store can be
#   shared between any number of readers.
#
#   Methods:
#   --------
#   - frontend(name) -> tuple[tuple[str, ...], bool]
#   - frontends(name_substr) -> dict[str, tuple[str, ...]]
#   - backend(name) -> tuple[tuple[str, ...], bool]
#   - backends(name_substr) -> dict[str, tuple[str, ...]]
#   - frontend_names() / backend_names() -> list[str]
#   - global_lines / defaults_lines (properties)
#   - blocks(kind) -> Mapping   → "frontend" or "backend" by name
#
# ==============================================

from typing import Dict, List, Mapping, Tuple

from .document import ConfigDocument, Lines


def find_exact(blocks: Mapping[str, Lines], name: str) -> Tuple[Lines, bool]:
    """
    Look up a block by its exact name.

    Returns:
        (lines, True) if present, ((), False) otherwise
    """
    lines = blocks.get(name)
    if lines is None:
        return (), False
    return lines, True


def find_substring(blocks: Mapping[str, Lines], name_substr: str) -> Dict[str, Lines]:
    """Return every block whose name contains name_substr."""
    return {name: lines for name, lines in blocks.items() if name_substr in name}


class BlockStore:
    """
    Query layer over a parsed config document.

    Lookup misses are not errors: exact queries report found=False,
    substring queries return an empty dict.
    """

    KINDS = ("frontend", "backend")

    def __init__(self, document: ConfigDocument):
        self._document = document

    @property
    def document(self) -> ConfigDocument:
        return self._document

    @property
    def global_lines(self) -> Lines:
        return self._document.global_lines

    @property
    def defaults_lines(self) -> Lines:
        return self._document.defaults_lines

    @property
    def warnings(self) -> Lines:
        return self._document.warnings

    def frontend(self, name: str) -> Tuple[Lines, bool]:
        """Contents of the frontend called name, and whether it exists."""
        return find_exact(self._document.frontend_blocks, name)

    def frontends(self, name_substr: str = "") -> Dict[str, Lines]:
        """Contents of all frontends whose names contain name_substr."""
        return find_substring(self._document.frontend_blocks, name_substr)

    def backend(self, name: str) -> Tuple[Lines, bool]:
        """Contents of the backend called name, and whether it exists."""
        return find_exact(self._document.backend_blocks, name)

    def backends(self, name_substr: str = "") -> Dict[str, Lines]:
        """Contents of all backends whose names contain name_substr."""
        return find_substring(self._document.backend_blocks, name_substr)

    def frontend_names(self) -> List[str]:
        return list(self._document.frontend_blocks)

    def backend_names(self) -> List[str]:
        return list(self._document.backend_blocks)

    def blocks(self, kind: str) -> Mapping[str, Lines]:
        """
        Return the frontend or backend mapping.

        Args:
            kind: "frontend" or "backend"

        Raises:
            ValueError: for any other kind
        """
        if kind == "frontend":
            return self._document.frontend_blocks
        if kind == "backend":
            return self._document.backend_blocks
        raise ValueError(f"Unknown block kind '{kind}', expected one of {self.KINDS}")

    def __repr__(self) -> str:
        return (
            f"BlockStore(frontends={len(self._document.frontend_blocks)}, "
            f"backends={len(self._document.backend_blocks)})"
        )

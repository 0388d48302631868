# ==============================================
# ConfigDocument
# ==============================================
#
# PURPOSE:
#   The parse result. Holds the four categorized collections the
#   classifier produces from one pass over a config file.
#
# WHY THIS CLASS IS FROZEN:
#   The document is built once and then handed to any number of
#   readers. Sequences are tuples and mappings are read-only
#   MappingProxyType views, so nothing downstream can change it.
#
# DATA CLASS: ConfigDocument
# --------------------------
#   Attributes:
#   -----------
#   - global_lines: tuple[str, ...]
#   - defaults_lines: tuple[str, ...]
#   - frontend_blocks: Mapping[str, tuple[str, ...]]
#   - backend_blocks: Mapping[str, tuple[str, ...]]
#   - warnings: tuple[str, ...]     → fallbacks taken while classifying
#
#   Methods:
#   --------
#   - build(...) (classmethod)      → freeze plain lists/dicts
#   - empty() (classmethod)
#   - to_dict() -> dict             → serialize for snapshots
#   - from_dict(data) (classmethod) → deserialize
#
# ==============================================

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Tuple


Lines = Tuple[str, ...]


def _freeze_blocks(blocks: Mapping[str, Iterable[str]]) -> Mapping[str, Lines]:
    # dict keeps first-seen order of block names
    return MappingProxyType({name: tuple(lines) for name, lines in blocks.items()})


@dataclass(frozen=True)
class ConfigDocument:
    """
    Immutable, categorized view of a load-balancer config file.

    Section header lines, blank lines and comments never appear in
    any collection. A frontend/backend declared without content is
    present with an empty tuple.
    """

    global_lines: Lines = ()
    defaults_lines: Lines = ()
    frontend_blocks: Mapping[str, Lines] = field(default_factory=lambda: MappingProxyType({}))
    backend_blocks: Mapping[str, Lines] = field(default_factory=lambda: MappingProxyType({}))
    warnings: Lines = ()

    @classmethod
    def build(
        cls,
        global_lines: Iterable[str] = (),
        defaults_lines: Iterable[str] = (),
        frontend_blocks: Mapping[str, Iterable[str]] = None,
        backend_blocks: Mapping[str, Iterable[str]] = None,
        warnings: Iterable[str] = (),
    ) -> "ConfigDocument":
        """
        Create a document from plain lists and dicts.

        Every collection is copied, so the caller may keep mutating
        its own containers afterwards.
        """
        return cls(
            global_lines=tuple(global_lines),
            defaults_lines=tuple(defaults_lines),
            frontend_blocks=_freeze_blocks(frontend_blocks or {}),
            backend_blocks=_freeze_blocks(backend_blocks or {}),
            warnings=tuple(warnings),
        )

    @classmethod
    def empty(cls) -> "ConfigDocument":
        return cls.build()

    def __hash__(self) -> int:
        # mappingproxy is unhashable, hash its items instead
        return hash((self.global_lines, self.defaults_lines,
                     tuple(self.frontend_blocks.items()),
                     tuple(self.backend_blocks.items())))

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the document to JSON-compatible types.

        Returns:
            Dictionary with "global", "defaults", "frontends",
            "backends" and "warnings" keys
        """
        return {
            "global": list(self.global_lines),
            "defaults": list(self.defaults_lines),
            "frontends": {name: list(lines) for name, lines in self.frontend_blocks.items()},
            "backends": {name: list(lines) for name, lines in self.backend_blocks.items()},
            "warnings": list(self.warnings),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConfigDocument":
        """
        Reconstruct a document from the output of to_dict().

        Args:
            data: Dictionary with saved document contents

        Returns:
            A ConfigDocument instance
        """
        return cls.build(
            global_lines=data.get("global", []),
            defaults_lines=data.get("defaults", []),
            frontend_blocks=data.get("frontends", {}),
            backend_blocks=data.get("backends", {}),
            warnings=data.get("warnings", []),
        )

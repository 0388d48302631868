# ==============================================
# Section (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that describe HOW the classifier sees a config file:
#   which section keywords exist, what state it carries from one line
#   to the next, and the options that tune its fallback behavior.
#
# ENUMS:
# ------
# - SectionType(Enum): NONE, GLOBAL, DEFAULTS, FRONTEND, BACKEND
#     The section a content line belongs to.
#
# - HeaderMatch(Enum): PREFIX, TOKEN
#     How a line is tested against a section keyword.
#       PREFIX → line starts with the keyword ("frontendx" counts)
#       TOKEN  → first whitespace token equals the keyword
#
# - MissingName(Enum): REUSE, DISCARD
#     What a "frontend"/"backend" header without a name does.
#       REUSE   → keep the previously active block name
#       DISCARD → drop content until the next named header
#
# CLASSES:
# --------
# - ClassifierState (frozen dataclass)
#     (section_type, subsection_name, discarding) threaded through the
#     line loop. discarding marks a run of dropped content lines.
#
# - ClassifierOptions (dataclass)
#     comment_marker, header_match, missing_name
#
# ==============================================

from enum import Enum
from dataclasses import dataclass, replace
from typing import Optional


class SectionType(Enum):
    """
    Enumeration of top-level config sections.

    The value of every member except NONE is the keyword that
    opens that section in the config file.
    """
    NONE = ""
    GLOBAL = "global"
    DEFAULTS = "defaults"
    FRONTEND = "frontend"
    BACKEND = "backend"

    @property
    def is_named(self) -> bool:
        """True for sections that carry a block name (frontend, backend)."""
        return self in (SectionType.FRONTEND, SectionType.BACKEND)


# Order matters: headers are tested in this order.
SECTION_KEYWORDS = (
    SectionType.GLOBAL,
    SectionType.DEFAULTS,
    SectionType.FRONTEND,
    SectionType.BACKEND,
)

COMMENT_MARKER = "#"


class HeaderMatch(Enum):
    PREFIX = "prefix"
    TOKEN = "token"


class MissingName(Enum):
    REUSE = "reuse"
    DISCARD = "discard"


@dataclass(frozen=True)
class ClassifierState:
    """
    Where the classifier currently is in the file.

    A new state is produced for every header line. Content lines only
    change it when a run of dropped lines starts or ends.
    """

    section_type: SectionType = SectionType.NONE
    subsection_name: Optional[str] = None  # Active frontend/backend name
    discarding: bool = False

    def enter(self, section_type: SectionType, name: Optional[str] = None) -> "ClassifierState":
        """Return the state after a header for section_type was seen."""
        if section_type.is_named:
            return ClassifierState(section_type, name)
        # global/defaults leave the block name alone
        return ClassifierState(section_type, self.subsection_name)

    def with_discarding(self, discarding: bool) -> "ClassifierState":
        if discarding == self.discarding:
            return self
        return replace(self, discarding=discarding)


@dataclass
class ClassifierOptions:
    """
    Options that tune how the classifier reads a file.

    The defaults reproduce the behavior existing config files were
    written against.
    """

    comment_marker: str = COMMENT_MARKER
    header_match: HeaderMatch = HeaderMatch.PREFIX
    missing_name: MissingName = MissingName.REUSE

    def __post_init__(self):
        if not self.comment_marker:
            raise ValueError("comment_marker must not be empty")
        # Accept plain strings, e.g. values read from the environment
        self.header_match = HeaderMatch(self.header_match)
        self.missing_name = MissingName(self.missing_name)

# ==============================================
# SectionClassifier
# ==============================================
#
# PURPOSE:
#   Takes the raw lines of a load-balancer config file and sorts
#   every line into one of four collections: global, defaults,
#   a named frontend, or a named backend.
#
# HOW IT WORKS:
#   One forward pass. A frozen ClassifierState (section type, active
#   block name, discarding flag) is threaded through the loop; each
#   line either produces a new state (header), is appended to the
#   current collection (content), or is dropped (blank / comment).
#
#   Content is collected in a private _DocumentBuilder that only the
#   running classify() call can see, then frozen into a
#   ConfigDocument at the end.
#
# CLASS: SectionClassifier
# ------------------------
#   Stateless between calls: options in, documents out.
#
#   Constructor:
#   ------------
#   - __init__(options: ClassifierOptions | None = None)
#
#   Methods:
#   --------
#   - classify(lines: Iterable[str]) -> ConfigDocument
#       Run the full pass. Lines are consumed lazily.
#
#   - match_header(line: str) -> SectionType | None
#       Which section keyword (if any) the trimmed line opens.
#
#   - _step(state, line, builder) -> ClassifierState
#       Process one raw line (internal).
#
# RULES PER LINE (after strip()):
# -------------------------------
#   1. "" or starts with the comment marker → skip, state unchanged
#   2. header "global"/"defaults"            → switch section
#   3. header "frontend"/"backend" [name]    → switch section, ensure
#      an entry for name. No name → reuse or discard (options)
#   4. anything else → append to current collection; dropped when no
#      section (or no block name) is active
#
# ==============================================

import logging
from typing import Dict, Iterable, List, Optional

from haproxy_sections.storage.document import ConfigDocument
from .section import (
    SECTION_KEYWORDS,
    ClassifierOptions,
    ClassifierState,
    HeaderMatch,
    MissingName,
    SectionType,
)

logger = logging.getLogger(__name__)


class _DocumentBuilder:
    """Mutable accumulator owned by a single classify() call."""

    def __init__(self):
        self.global_lines: List[str] = []
        self.defaults_lines: List[str] = []
        self.frontend_blocks: Dict[str, List[str]] = {}
        self.backend_blocks: Dict[str, List[str]] = {}
        self.warnings: List[str] = []

    def blocks_for(self, section_type: SectionType) -> Dict[str, List[str]]:
        if section_type == SectionType.FRONTEND:
            return self.frontend_blocks
        return self.backend_blocks

    def ensure_block(self, section_type: SectionType, name: str) -> None:
        self.blocks_for(section_type).setdefault(name, [])

    def append(self, state: ClassifierState, line: str) -> bool:
        """Append line to the collection for state. False if it was dropped."""
        if state.section_type == SectionType.GLOBAL:
            self.global_lines.append(line)
        elif state.section_type == SectionType.DEFAULTS:
            self.defaults_lines.append(line)
        elif state.section_type.is_named and state.subsection_name is not None:
            self.blocks_for(state.section_type).setdefault(state.subsection_name, []).append(line)
        else:
            return False
        return True

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)

    def freeze(self) -> ConfigDocument:
        return ConfigDocument.build(
            global_lines=self.global_lines,
            defaults_lines=self.defaults_lines,
            frontend_blocks=self.frontend_blocks,
            backend_blocks=self.backend_blocks,
            warnings=self.warnings,
        )


class SectionClassifier:
    """
    Sorts config lines into global, defaults, frontend and backend
    collections.

    Malformed input never raises: content before the first header is
    dropped, and a frontend/backend header without a name falls back
    according to ClassifierOptions.missing_name. Both cases are
    recorded in ConfigDocument.warnings.
    """

    def __init__(self, options: Optional[ClassifierOptions] = None):
        """
        Initialize the classifier.

        Args:
            options: Optional ClassifierOptions. Defaults match headers by
                     prefix, use "#" for comments and reuse the previous
                     block name for unnamed frontend/backend headers.
        """
        self.options = options or ClassifierOptions()

    def classify(self, lines: Iterable[str]) -> ConfigDocument:
        """
        Classify every line and return the finished document.

        Args:
            lines: Raw lines, trailing newlines allowed. Consumed once,
                   one line at a time.

        Returns:
            The frozen ConfigDocument
        """
        builder = _DocumentBuilder()
        state = ClassifierState()
        line_count = 0
        for line_no, raw_line in enumerate(lines, 1):
            state = self._step(state, raw_line, builder, line_no)
            line_count = line_no

        document = builder.freeze()
        logger.debug(
            "Classified %d lines: %d global, %d defaults, %d frontends, %d backends",
            line_count,
            len(document.global_lines),
            len(document.defaults_lines),
            len(document.frontend_blocks),
            len(document.backend_blocks),
        )
        return document

    def _step(
        self,
        state: ClassifierState,
        raw_line: str,
        builder: _DocumentBuilder,
        line_no: int = 0,
    ) -> ClassifierState:
        """
        Process a single line and return the state for the next one.

        Args:
            state: State after the previous line
            raw_line: The untrimmed line
            builder: Accumulator for content lines
            line_no: 1-based line number, used in warnings

        Returns:
            The new ClassifierState
        """
        line = raw_line.strip()
        if not line or line.startswith(self.options.comment_marker):
            return state

        section_type = self.match_header(line)
        if section_type is None:
            if builder.append(state, line):
                return state.with_discarding(False)
            if not state.discarding:
                builder.warn(f"line {line_no}: content outside of any named section dropped: {line!r}")
            return state.with_discarding(True)

        if not section_type.is_named:
            return state.enter(section_type)

        words = line.split()
        if len(words) > 1:
            name = words[1]
            builder.ensure_block(section_type, name)
            return state.enter(section_type, name)

        # "frontend"/"backend" without a name
        if self.options.missing_name == MissingName.DISCARD:
            builder.warn(f"line {line_no}: {section_type.value} header without a name, content discarded")
            return state.enter(section_type, None).with_discarding(True)

        if state.subsection_name is not None:
            builder.warn(
                f"line {line_no}: {section_type.value} header without a name, "
                f"reusing '{state.subsection_name}'"
            )
        else:
            builder.warn(f"line {line_no}: {section_type.value} header without a name")
        return state.enter(section_type, state.subsection_name)

    def match_header(self, line: str) -> Optional[SectionType]:
        """
        Return the section a trimmed line opens, or None for content.

        PREFIX mode: "frontendx foo" opens a frontend.
        TOKEN mode: only an exact first word does.
        """
        if self.options.header_match == HeaderMatch.TOKEN:
            words = line.split(maxsplit=1)
            first = words[0] if words else ""
            for section_type in SECTION_KEYWORDS:
                if first == section_type.value:
                    return section_type
            return None

        for section_type in SECTION_KEYWORDS:
            if line.startswith(section_type.value):
                return section_type
        return None

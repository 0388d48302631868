# ==============================================
# ConfigParser — Orchestrator
# ==============================================
#
# PURPOSE:
#   The class callers use. Ties the line source, the classifier
#   and the block store together into "parse this file, then let
#   me ask about its sections".
#
# HOW IT CONNECTS THE PIECES:
#
#   ┌──────────────────────────────────────────────┐
#   │                 ConfigParser                 │
#   │                                              │
#   │   sources.open_lines(path | url)             │
#   │            │ lazy lines                      │
#   │            ▼                                 │
#   │   classification.SectionClassifier           │
#   │            │ ConfigDocument (frozen)         │
#   │            ▼                                 │
#   │   storage.BlockStore  ◄── queries            │
#   └──────────────────────────────────────────────┘
#
# CLASS: ConfigParser
# -------------------
#
#   Constructor:
#   ------------
#   - __init__(config_path, options=None, config=None)
#
#   Public Methods:
#   ---------------
#   - parse() -> BlockStore
#       Open the source, classify every line, publish the store.
#       Raises ConfigReadError; the previously published store (if
#       any) is kept on failure.
#
#   - frontend(name) / backend(name) -> (lines, found)
#   - frontends(substr) / backends(substr) -> dict
#   - global_lines / defaults_lines / store (properties)
#
# FUNCTIONS:
# ----------
#   - parse_lines(lines, options=None) -> BlockStore
#   - parse_text(text, options=None) -> BlockStore
#
# ==============================================

import io
import logging
import time
from typing import Dict, Iterable, Optional, Tuple

from haproxy_sections.config import AppConfig, get_config
from haproxy_sections.classification import ClassifierOptions, SectionClassifier
from haproxy_sections.errors import ParserNotReadyError
from haproxy_sections.sources import Source, open_lines
from haproxy_sections.storage import BlockStore
from haproxy_sections.storage.document import Lines

logger = logging.getLogger(__name__)


def parse_lines(lines: Iterable[str], options: Optional[ClassifierOptions] = None) -> BlockStore:
    """Classify already-available lines and wrap the result in a BlockStore."""
    return BlockStore(SectionClassifier(options).classify(lines))


def parse_text(text: str, options: Optional[ClassifierOptions] = None) -> BlockStore:
    """Classify a whole config held in memory, split the way a file read would."""
    return parse_lines(io.StringIO(text, newline=None), options)


class ConfigParser:
    """
    Primitive HAProxy config parser.

    Detects the four main sections (global, defaults, frontends and
    backends) and answers name-based queries about them.

    Example:
        parser = ConfigParser("/var/lib/haproxy/conf/haproxy.config")
        parser.parse()
        lines, found = parser.backend("be_http:ns:svc")
    """

    def __init__(
        self,
        config_path: Source,
        options: Optional[ClassifierOptions] = None,
        config: Optional[AppConfig] = None,
    ):
        """
        Args:
            config_path: File path or http(s) URL of the config
            options: Classifier options; taken from config if omitted
            config: Optional configuration. If None, loads from environment.
        """
        self._config = config or get_config()
        self.config_path = config_path
        self.options = options or self._config.parser.to_options()
        self._classifier = SectionClassifier(self.options)
        self._store: Optional[BlockStore] = None

    def parse(self) -> BlockStore:
        """
        Parse the config source and publish the resulting store.

        Returns:
            The BlockStore for the freshly parsed document

        Raises:
            ConfigReadError: if the source cannot be opened or read
        """
        start = time.time()
        with open_lines(
            self.config_path,
            encoding=self._config.source.encoding,
            timeout=self._config.source.http_timeout_seconds,
        ) as lines:
            document = self._classifier.classify(lines)

        self._store = BlockStore(document)
        logger.info(
            "Parsed %s in %.3fs (%d frontends, %d backends, %d warnings)",
            self.config_path,
            time.time() - start,
            len(document.frontend_blocks),
            len(document.backend_blocks),
            len(document.warnings),
        )
        return self._store

    @property
    def is_parsed(self) -> bool:
        return self._store is not None

    @property
    def store(self) -> BlockStore:
        if self._store is None:
            raise ParserNotReadyError(f"{self.config_path} has not been parsed yet, call parse() first")
        return self._store

    @property
    def global_lines(self) -> Lines:
        return self.store.global_lines

    @property
    def defaults_lines(self) -> Lines:
        return self.store.defaults_lines

    def frontend(self, name: str) -> Tuple[Lines, bool]:
        return self.store.frontend(name)

    def frontends(self, name_substr: str = "") -> Dict[str, Lines]:
        return self.store.frontends(name_substr)

    def backend(self, name: str) -> Tuple[Lines, bool]:
        return self.store.backend(name)

    def backends(self, name_substr: str = "") -> Dict[str, Lines]:
        return self.store.backends(name_substr)

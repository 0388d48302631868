# ==============================================
# Errors
# ==============================================
#
# Every error the package raises on purpose derives from
# HaproxySectionsError, so callers (and the CLI) can catch them in
# one place. Lookup misses are NOT errors and have no class here.
#
# - ConfigReadError     → the config source could not be opened/read
# - ParserNotReadyError → ConfigParser queried before parse()
# - SnapshotError       → a stored snapshot is unreadable
#
# ==============================================


class HaproxySectionsError(Exception):
    """Base class for errors raised by haproxy_sections."""


class ConfigReadError(HaproxySectionsError):
    """
    The config source failed to open or failed mid-stream.

    Classification is abandoned; no partial document is returned.
    The original exception is kept as __cause__.
    """

    def __init__(self, source, reason: str):
        self.source = str(source)
        self.reason = reason
        super().__init__(f"Could not read config from {self.source}: {reason}")


class ParserNotReadyError(HaproxySectionsError):
    """Raised when a ConfigParser is queried before a successful parse()."""


class SnapshotError(HaproxySectionsError):
    """Raised when a stored snapshot cannot be decoded."""

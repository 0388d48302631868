# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - ParserConfig (dataclass)
#     comment_marker: str   (default "#")
#     header_match: str     (default "prefix", or "token")
#     missing_name: str     (default "reuse", or "discard")
#
# - SourceConfig (dataclass)
#     encoding: str               (default "utf-8")
#     http_timeout_seconds: float (default 10.0)
#
# - AppConfig (dataclass)
#     parser: ParserConfig
#     source: SourceConfig
#     config_path: str | None     (default None)
#     snapshot_dir: str           (default "snapshots/")
#     log_level: str              (default "WARNING")
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Forget the singleton (next get_config() reloads).
#
# USAGE:
# ------
#   from haproxy_sections.config import get_config
#   config = get_config()
#   print(config.config_path)
#   print(config.parser.header_match)
#
# ==============================================

import codecs
import os
from dataclasses import dataclass
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv

from haproxy_sections.classification.section import (
    COMMENT_MARKER,
    ClassifierOptions,
    HeaderMatch,
    MissingName,
)


@dataclass
class ParserConfig:
    """Section classifier configuration."""
    comment_marker: str = COMMENT_MARKER
    header_match: str = HeaderMatch.PREFIX.value
    missing_name: str = MissingName.REUSE.value

    def __post_init__(self):
        # Fail at load time rather than on the first parse
        allowed = [m.value for m in HeaderMatch]
        if self.header_match not in allowed:
            raise ValueError(f"SECTION_HEADER_MATCH must be one of {allowed}, got '{self.header_match}'")
        allowed = [m.value for m in MissingName]
        if self.missing_name not in allowed:
            raise ValueError(f"SECTION_MISSING_NAME must be one of {allowed}, got '{self.missing_name}'")
        if not self.comment_marker:
            raise ValueError("SECTION_COMMENT_MARKER must not be empty")

    def to_options(self) -> ClassifierOptions:
        return ClassifierOptions(
            comment_marker=self.comment_marker,
            header_match=HeaderMatch(self.header_match),
            missing_name=MissingName(self.missing_name),
        )


@dataclass
class SourceConfig:
    """Line source configuration (files and URLs)."""
    encoding: str = "utf-8"
    http_timeout_seconds: float = 10.0

    def __post_init__(self):
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValueError(f"SOURCE_ENCODING is not a known text encoding: '{self.encoding}'") from e
        if self.http_timeout_seconds <= 0:
            raise ValueError(f"SOURCE_HTTP_TIMEOUT must be positive, got {self.http_timeout_seconds}")


@dataclass
class AppConfig:
    """Main application configuration."""
    parser: ParserConfig
    source: SourceConfig
    config_path: Optional[str] = None
    snapshot_dir: str = "snapshots/"
    log_level: str = "WARNING"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration

    Raises:
        ValueError: if a variable holds an unsupported value
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    # Build classifier configuration
    parser_config = ParserConfig(
        comment_marker=os.getenv("SECTION_COMMENT_MARKER", COMMENT_MARKER),
        header_match=os.getenv("SECTION_HEADER_MATCH", HeaderMatch.PREFIX.value).lower(),
        missing_name=os.getenv("SECTION_MISSING_NAME", MissingName.REUSE.value).lower()
    )

    # Build source configuration
    source_config = SourceConfig(
        encoding=os.getenv("SOURCE_ENCODING", "utf-8"),
        http_timeout_seconds=float(os.getenv("SOURCE_HTTP_TIMEOUT", "10.0"))
    )

    # Build main application configuration
    _config_instance = AppConfig(
        parser=parser_config,
        source=source_config,
        config_path=os.getenv("HAPROXY_CONFIG_PATH") or None,
        snapshot_dir=os.getenv("SNAPSHOT_DIR", "snapshots/"),
        log_level=os.getenv("LOG_LEVEL", "WARNING").upper()
    )

    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config_instance
    _config_instance = None

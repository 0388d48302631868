# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - sample_config_path → tests/data/haproxy.config
# - scenario_lines     → the small global/frontend/backend example
# - app_config         → AppConfig with defaults, no .env involved
# - clean_config       → (autouse) forget the get_config() singleton
# ==============================================

from pathlib import Path

import pytest

from haproxy_sections.config import AppConfig, ParserConfig, SourceConfig, reset_config


DATA_DIR = Path(__file__).parent / "data"

CONFIG_ENV_VARS = (
    "HAPROXY_CONFIG_PATH",
    "SECTION_COMMENT_MARKER",
    "SECTION_HEADER_MATCH",
    "SECTION_MISSING_NAME",
    "SOURCE_ENCODING",
    "SOURCE_HTTP_TIMEOUT",
    "SNAPSHOT_DIR",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Every test starts without a cached config or stray env vars."""
    for var in CONFIG_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def sample_config_path() -> Path:
    return DATA_DIR / "haproxy.config"


@pytest.fixture
def scenario_lines() -> list:
    return [
        "global\n",
        "maxconn 100\n",
        "frontend public\n",
        "bind :80\n",
        "backend be1\n",
        "server s1 1.2.3.4:80",
    ]


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    return AppConfig(
        parser=ParserConfig(),
        source=SourceConfig(),
        snapshot_dir=str(tmp_path / "snapshots"),
    )

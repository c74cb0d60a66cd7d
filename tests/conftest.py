# Shared pytest fixtures
from __future__ import annotations

import logging
import tempfile
from pathlib import Path

import pytest

from supply_monitor.logging.init import LOGGER_NAME, reset_logging

SHEET_URL_1 = "https://docs.google.com/spreadsheets/d/1AbCdEfG/edit"
SHEET_URL_2 = "https://docs.google.com/spreadsheets/d/1ZyXwVu"
WEBHOOK_1 = "https://discord.com/api/webhooks/123/abc"
WEBHOOK_2 = "https://discord.com/api/webhooks/456/def"


def _make_row(name=None, sheet_url=None, webhook=None, width: int = 13) -> list:
    """Build a Commander Database row with values at columns A, C and M."""
    row: list = [""] * width
    row[0] = name
    row[2] = sheet_url
    row[12] = webhook
    return row


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def make_row():
    return _make_row


@pytest.fixture()
def sample_rows() -> list[list]:
    return [
        _make_row("Saraian 1st Army", SHEET_URL_1, WEBHOOK_1),
        _make_row("", "", ""),
        _make_row("Keltic Raiders", SHEET_URL_2, WEBHOOK_2),
    ]


@pytest.fixture()
def sample_layout_yaml() -> str:
    return """name_column: 0
url_column: 1
endpoint_column: 11
tab_name: Commander Database
range_spec: A3:M
"""


@pytest.fixture()
def write_layout(temp_workdir: Path, sample_layout_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "layout.yml"
    cfg.write_text(sample_layout_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sheet_env(monkeypatch) -> dict[str, str]:
    env = {"DATABASE_SHEET_ID": "db-sheet-123"}
    monkeypatch.setenv("DATABASE_SHEET_ID", "db-sheet-123")
    monkeypatch.delenv("GOOGLE_SHEETS_API_KEY", raising=False)
    monkeypatch.delenv("SUPPLY_MONITOR_LAYOUT", raising=False)
    return env

"""Shared pytest fixtures and test helpers for signsheet tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from datetime import date
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from signsheet.config.settings import SignSheetSettings
from signsheet.infrastructure.database.engine import init_database
from signsheet.infrastructure.store import SheetStore
from signsheet.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's SIGNSHEET_* environment out of every test."""
    for key in list(os.environ):
        if key.startswith("SIGNSHEET_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def _reset_process_state() -> Generator[None]:
    """Undo what a CLI invocation leaves behind: log handlers and telemetry."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    disable_telemetry()
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path / "test.db")
    try:
        yield engine
    finally:
        engine.dispose()


def make_store(root: Path, **overrides: Any) -> SheetStore:
    """Open a store under *root*, with optional ``signsheet.toml`` sections.

    ``make_store(root, sheet={"auto_create": False})`` behaves as if that
    section were written to the config file.
    """
    # A config path that does not exist turns off walk-up discovery.
    settings = SignSheetSettings.from_cli(
        config_path=str(root / "absent.toml"), root=root, **overrides
    )
    return SheetStore(settings)


@pytest.fixture
def store(tmp_path: Path) -> Generator[SheetStore]:
    """Store with default settings on a temp root."""
    s = make_store(tmp_path)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def _isolated_store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp root so the CLI creates an isolated store.

    Use via ``@pytest.mark.usefixtures("_isolated_store")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def fixed_clock(day: date) -> Any:
    """A ``clock`` callable that always answers *day*."""
    return lambda: day


def sign_in(store: SheetStore, *days: date, owner: str | None = None) -> None:
    """Sign in on each of *days* via SheetService, asserting success."""
    from signsheet.services.sheet import SheetService

    service = SheetService(store)
    for day in days:
        result = service.sign_in(owner=owner, on=day)
        assert result.ok, result.error

"""Pytest configuration and fixtures."""

import itertools
import logging
import os
from collections.abc import Callable
from pathlib import Path
from uuid import UUID

import pytest
from structlog.stdlib import ProcessorFormatter
from typer.testing import CliRunner

from cuescript.config import CueScriptSettings, reset_settings, set_settings
from cuescript.editor import ScriptEditor
from cuescript.storage.files import save_script


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture(autouse=True)
def isolated_test_environment(tmp_path, monkeypatch):
    """Run every test with default settings and no user config files.

    HOME and the working directory point into tmp_path so config discovery
    and .env loading never see the developer's machine.
    """
    for var in [k for k in os.environ if k.startswith("CUESCRIPT_")]:
        monkeypatch.delenv(var)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)

    reset_settings()
    set_settings(CueScriptSettings())

    # CLI callbacks may reconfigure logging onto the runner's streams
    root_logger = logging.getLogger()
    original_level = root_logger.level
    original_handlers = root_logger.handlers.copy()

    yield

    for handler in root_logger.handlers.copy():
        if handler not in original_handlers and isinstance(
            handler.formatter, ProcessorFormatter
        ):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(original_level)
    reset_settings()


@pytest.fixture
def settings() -> CueScriptSettings:
    """Default settings instance."""
    return CueScriptSettings()


@pytest.fixture
def sequential_ids() -> Callable[[], UUID]:
    """Deterministic id factory producing UUID(int=1), UUID(int=2), ..."""
    counter = itertools.count(1)
    return lambda: UUID(int=next(counter))


@pytest.fixture
def editor(settings) -> ScriptEditor:
    """Editor over a short script with lines 1-5."""
    editor = ScriptEditor.new("The Tempest", settings=settings)
    editor.add_line(1, "Enter PROSPERO and MIRANDA")
    editor.add_line(2, "If by your art, my dearest father")
    editor.add_line(3, "Be collected: no more amazement")
    editor.add_line(4, "LX Q5 standby GO")
    editor.add_line(5, "Exeunt")
    return editor


@pytest.fixture
def document(tmp_path, editor) -> Path:
    """The editor fixture's script saved as a JSON document."""
    return save_script(editor.script, tmp_path / "tempest.json")


@pytest.fixture
def runner() -> CliRunner:
    """CLI runner for invoking the typer app."""
    return CliRunner()

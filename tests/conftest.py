"""Shared test fixtures for restdsl.

Provides the petstore documents, builders for hand-written operations,
isolated config environments, output/logging reset, and the CLI runner.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from restdsl.emitter import RecordingEmitter
from restdsl.generator import DirectToOperationId, OperationFilter, OperationVisitor
from restdsl.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output and logging state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and the ``restdsl`` logger after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time, and the CLI callback attaches a RichHandler bound to
    that stderr console.  When Typer's CliRunner closes those streams the
    cached references go stale, so both are dropped here.
    """
    yield
    reset_output()
    logger = logging.getLogger("restdsl")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Raw document fixtures (plain dicts loaded from JSON files)
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_20_raw() -> dict[str, Any]:
    """Load the raw Swagger 2.0 petstore document."""
    with open(FIXTURES_DIR / "petstore_2.0.json") as f:
        return json.load(f)


@pytest.fixture
def petstore_30_raw() -> dict[str, Any]:
    """Load the raw OpenAPI 3.0 petstore document."""
    with open(FIXTURES_DIR / "petstore_3.0.json") as f:
        return json.load(f)


@pytest.fixture
def petstore_30_file(tmp_path: Path) -> Path:
    """Copy the OpenAPI 3.0 petstore into tmp_path and return its path."""
    target = tmp_path / "petstore.json"
    target.write_text((FIXTURES_DIR / "petstore_3.0.json").read_text())
    return target


@pytest.fixture
def petstore_20_file(tmp_path: Path) -> Path:
    """Copy the Swagger 2.0 petstore into tmp_path and return its path."""
    target = tmp_path / "petstore-v2.json"
    target.write_text((FIXTURES_DIR / "petstore_2.0.json").read_text())
    return target


# ---------------------------------------------------------------------------
# Visitor fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def recorder() -> RecordingEmitter:
    """A fresh recording sink."""
    return RecordingEmitter()


@pytest.fixture
def visitor(recorder: RecordingEmitter) -> OperationVisitor[RecordingEmitter]:
    """An accept-all visitor routing to ``direct:<operationId>``."""
    return OperationVisitor(recorder, OperationFilter(), DirectToOperationId())


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path
    so that tests never touch real user config. Clears all RESTDSL_*
    environment variables and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr("restdsl.config._is_xdg_platform", lambda: True)

    for var in ["RESTDSL_FILTER", "RESTDSL_DESTINATION", "RESTDSL_FORMAT"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()

"""Shared pytest fixtures and test helpers for typeshape tests."""

from __future__ import annotations

import sys
import textwrap
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

SCHEMA_MODULE = "ts_fixture_schemas"

SCHEMA_MODULE_SOURCE = textwrap.dedent(
    """
    import numbers
    from datetime import date

    from typeshape import factory, fail

    USER_SCHEMA = {"name": str, "age": numbers.Number, "tags": [str]}

    User = factory(USER_SCHEMA, name="User").constrain(
        lambda v: v["age"] >= 0 or fail("age must be non-negative")
    )

    Member = factory({"joined": date.fromisoformat}, name="Member")

    BROKEN = {"name": object()}

    NOT_A_SCHEMA = 42
    """
)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def schema_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[str]:
    """Importable module holding sample schemas; yields its module name."""
    (tmp_path / f"{SCHEMA_MODULE}.py").write_text(SCHEMA_MODULE_SOURCE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    try:
        yield SCHEMA_MODULE
    finally:
        sys.modules.pop(SCHEMA_MODULE, None)

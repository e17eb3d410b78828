"""Shared fixtures for vcs-fetch tests."""

from collections.abc import Callable

import pytest
from helpers import ScriptedRunner
from pytest_mock import MockerFixture
from rich.console import Console


@pytest.fixture
def runner() -> ScriptedRunner:
    """Runner where every command succeeds with no output."""
    return ScriptedRunner()


@pytest.fixture
def console(mocker: MockerFixture) -> Console:
    """Console double recording printed text."""
    return mocker.MagicMock(spec=Console)


@pytest.fixture
def printed(console: Console) -> Callable[[], list[str]]:
    """Get everything printed to the console double so far."""

    def _printed() -> list[str]:
        return [str(call.args[0]) for call in console.print.call_args_list]  # type: ignore[attr-defined]

    return _printed

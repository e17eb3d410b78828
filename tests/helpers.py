"""Test doubles for vcs-fetch tests."""

from collections.abc import Sequence
from pathlib import Path

from vcs_fetch.vcs.runner import CommandResult


class ScriptedRunner:
    """Stand-in for run_command that returns scripted results and records calls.

    Results are looked up by the arguments following the executable. A list of
    results is consumed one per call; the last one is repeated.
    """

    def __init__(self, responses: dict[tuple[str, ...], CommandResult | list[CommandResult]] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[list[str]] = []
        self.cwds: list[Path] = []

    def __call__(self, cmd: list[str]) -> CommandResult:
        self.calls.append(list(cmd))
        self.cwds.append(Path.cwd())
        response = self.responses.get(tuple(cmd[1:]), CommandResult(0, ""))
        if isinstance(response, list):
            return response.pop(0) if len(response) > 1 else response[0]
        return response

    def args(self) -> list[list[str]]:
        """Get recorded calls without the executable."""
        return [call[1:] for call in self.calls]

    def count(self, *args: str) -> int:
        """Count calls made with exactly these arguments."""
        return sum(1 for call in self.args() if call == list(args))

    def called_with(self, prefix: Sequence[str]) -> bool:
        """Check if any call starts with the given arguments."""
        return any(call[: len(prefix)] == list(prefix) for call in self.args())


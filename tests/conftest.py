"""Shared pytest fixtures and configuration for the cratectl test suite.

Guidelines
----------
* No internet access in any test — transports are faked.
* No writes outside ``tmp_path``; the system binary directory is
  replaced by a temporary one.
* No real privilege escalation — privilege checkers are faked.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from cratectl.core.crate_manager import CrateManager
from cratectl.core.models import Crate, TransportResponse


class FakeTransport:
    """Returns a canned response and records requested URLs."""

    def __init__(self, response: TransportResponse | None = None) -> None:
        self.response = response or TransportResponse(status_code=200, body=b"{}")
        self.requested: list[str] = []

    def get(self, url: str) -> TransportResponse:
        self.requested.append(url)
        return self.response


class FakePrivileges:
    """Configurable privilege checker that records relaunches."""

    def __init__(self, *, elevated: bool = True, relaunch_code: int = 0) -> None:
        self.elevated = elevated
        self.relaunch_code = relaunch_code
        self.relaunched_with: list[list[str]] = []

    def is_elevated(self) -> bool:
        return self.elevated

    def elevate(self, args: Sequence[str]) -> int:
        self.relaunched_with.append(list(args))
        return self.relaunch_code


class ScriptedInputs:
    """Input provider that replays prepared answers in order."""

    def __init__(self, *answers: str) -> None:
        self._answers = list(answers)
        self.prompts: list[str] = []

    def read_line(self, prompt: str, *, default: str = "") -> str:
        self.prompts.append(prompt)
        return self._answers.pop(0).strip()

    def choose(self, prompt: str, choices: Sequence[str]) -> str:
        self.prompts.append(prompt)
        answer = self._answers.pop(0)
        assert answer in choices
        return answer


def make_crate(**overrides: object) -> Crate:
    """Factory with sensible defaults for concise tests."""
    defaults: dict[str, object] = {
        "project_name": "tool",
        "binary_name": "tool",
        "binary_payload": b"\x7fELF\x02\x01\x01",
        "source_url": "https://example.com/tool",
    }
    defaults.update(overrides)
    return Crate(**defaults)  # type: ignore[arg-type]


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "bin"
    directory.mkdir()
    return directory


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def privileges() -> FakePrivileges:
    return FakePrivileges()


@pytest.fixture
def manager(transport: FakeTransport, privileges: FakePrivileges, bin_dir: Path) -> CrateManager:
    return CrateManager(
        transport=transport,
        privileges=privileges,
        bin_dir=bin_dir,
        system="Linux",
    )

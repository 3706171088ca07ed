"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import pytest
from brewctl.core.cancellation import CancellationToken
from brewctl.core.commands import CommandSpec
from brewctl.core.operator import BrewOperator
from brewctl.models.operation import Outcome, cancelled, succeeded
from brewctl.reporting.recording import RecordingReporter


class FakeRunner:
    """Stands in for OperationRunner without spawning processes.

    Returns ``outcome`` immediately, or with ``block=True`` waits until the
    token is cancelled and then reports CANCELLED.
    """

    def __init__(self, outcome: Outcome | None = None, *, block: bool = False) -> None:
        self.outcome = outcome or succeeded()
        self.block = block
        self.specs: list[CommandSpec] = []
        self.tokens: list[CancellationToken] = []

    async def run(self, spec: CommandSpec, token: CancellationToken) -> Outcome:
        self.specs.append(spec)
        self.tokens.append(token)
        if self.block:
            await token.wait()
            return cancelled(-15)
        return self.outcome

    @property
    def last_args(self) -> tuple[str, ...]:
        return self.specs[-1].args


@pytest.fixture
def reporter() -> RecordingReporter:
    """Reporter that records notifications."""
    return RecordingReporter()


@pytest.fixture
def runner_factory() -> type[FakeRunner]:
    """The FakeRunner class, for tests that need a custom outcome."""
    return FakeRunner


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Runner that succeeds without spawning anything."""
    return FakeRunner()


@pytest.fixture
def operator(reporter: RecordingReporter, fake_runner: FakeRunner) -> BrewOperator:
    """BrewOperator wired to the recording reporter and fake runner."""
    return BrewOperator(
        reporter=reporter, runner=fake_runner, brew_path="brew"  # type: ignore[arg-type]
    )


@pytest.fixture
def mock_services_json() -> str:
    """Sample ``brew services list --json`` output."""
    return """[
  {"name": "redis", "status": "started", "user": "alice",
   "file": "/Users/alice/Library/LaunchAgents/homebrew.mxcl.redis.plist", "exit_code": 0},
  {"name": "postgresql@16", "status": "none", "user": null, "file": null, "exit_code": null},
  {"name": "nginx", "status": "error", "user": "root",
   "file": "/Library/LaunchDaemons/homebrew.mxcl.nginx.plist", "exit_code": 256},
  {"name": "unbound", "status": "stopped", "user": "root", "file": null, "exit_code": null}
]"""


@pytest.fixture
def mock_installed_json() -> str:
    """Sample ``brew info --json=v2 --installed`` output."""
    return """{
  "formulae": [
    {"name": "wget", "desc": "Internet file retriever", "pinned": false,
     "installed": [{"version": "1.24.5"}]},
    {"name": "node", "desc": "Platform built on V8", "pinned": true,
     "installed": [{"version": "21.7.1"}]}
  ],
  "casks": [
    {"token": "firefox", "desc": "Web browser", "version": "125.0", "installed": "124.0.2"}
  ]
}"""


@pytest.fixture
def mock_outdated_json() -> str:
    """Sample ``brew outdated --json=v2`` output."""
    return """{
  "formulae": [
    {"name": "node", "installed_versions": ["21.7.1"], "current_version": "22.1.0",
     "pinned": true, "pinned_version": "21.7.1"},
    {"name": "git", "installed_versions": ["2.44.0"], "current_version": "2.45.0",
     "pinned": false, "pinned_version": null}
  ],
  "casks": [
    {"name": "firefox", "installed_versions": ["124.0.2"], "current_version": "125.0"}
  ]
}"""

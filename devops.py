"""Developer tasks for brewctl.

Usage: python devops.py <task>
Tasks: fmt, lint, test, test-unit, test-integration, clean
"""

import subprocess
import sys
from collections.abc import Callable


def _run(commands: list[list[str]]) -> None:
    """Execute a sequence of commands, exiting on first failure."""
    for cmd in commands:
        print(f"$ {' '.join(cmd)}")
        try:
            subprocess.run(cmd, check=True)  # nosec: B603, B607
        except FileNotFoundError:
            print(f"{cmd[0]} is not installed", file=sys.stderr)
            sys.exit(127)
        except subprocess.CalledProcessError as e:
            print(f"Command failed: {' '.join(e.cmd)}", file=sys.stderr)
            sys.exit(e.returncode)


def format_code() -> None:
    """Format and autofix with Ruff."""
    _run([["ruff", "format", "."], ["ruff", "check", "--fix", "."]])


def lint() -> None:
    """Check formatting and lint rules without changing files."""
    _run([["ruff", "format", "--check", "."], ["ruff", "check", "."]])


def test() -> None:
    """Run the whole test suite."""
    _run([[sys.executable, "-m", "pytest", "-q"]])


def test_unit() -> None:
    """Run unit tests only. The runner tests still spawn Python children."""
    _run([[sys.executable, "-m", "pytest", "-q", "tests/unit"]])


def test_integration() -> None:
    """Run the tests that drive a stand-in brew script."""
    _run([[sys.executable, "-m", "pytest", "-q", "tests/integration"]])


def clean() -> None:
    """Remove caches and build artifacts."""
    _run(
        [
            ["find", ".", "-type", "d", "-name", "__pycache__", "-exec", "rm", "-rf", "{}", "+"],
            ["find", ".", "-type", "f", "-name", "*.pyc", "-delete"],
            ["rm", "-rf", ".pytest_cache", ".ruff_cache", ".mypy_cache", "dist", "build"],
        ]
    )


TASKS: dict[str, Callable[[], None]] = {
    "fmt": format_code,
    "lint": lint,
    "test": test,
    "test-unit": test_unit,
    "test-integration": test_integration,
    "clean": clean,
}


def main() -> None:
    if len(sys.argv) != 2 or sys.argv[1] not in TASKS:
        print(__doc__, file=sys.stderr)
        sys.exit(2)
    TASKS[sys.argv[1]]()


if __name__ == "__main__":
    main()

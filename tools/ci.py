#!/usr/bin/env python3
# Copyright 2026 ProtoIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run all CI checks locally: format, lint, type check, tests, and build."""

import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, list[str]]] = [
    ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/"]),
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/"]),
    ("Type check", ["uv", "run", "ty", "check", "src/"]),
    ("Tests", ["uv", "run", "pytest", "--cov=protoidl", "--cov-report=term-missing"]),
    ("Build", ["uv", "build"]),
]


def main(selected: list[str] | None = None) -> int:
    """Run the CI steps (all, or those whose names start with a selected word) and report results."""
    steps = _select_steps(selected or [])
    if not steps:
        print(chalk.red(f"No CI step matches: {', '.join(selected or [])}"))
        return 2

    results: list[tuple[str, bool, float]] = []
    for name, cmd in steps:
        _print_banner(name)
        start = time.monotonic()
        proc = subprocess.run(cmd, cwd=_repo_root())
        results.append((name, proc.returncode == 0, time.monotonic() - start))

    _print_banner("  Summary")
    for name, passed, elapsed in results:
        status = chalk.green("PASS") if passed else chalk.red("FAIL")
        colour = chalk.green if passed else chalk.red
        print(colour(f"  {status}  {name} ({elapsed:.1f}s)"))

    print()
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _select_steps(selected: list[str]) -> list[tuple[str, list[str]]]:
    if not selected:
        return STEPS
    wanted = [word.lower() for word in selected]
    return [step for step in STEPS if any(step[0].lower().startswith(word) for word in wanted)]


def _print_banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(title))
    print(sep)


def _repo_root() -> str:
    return str(Path(__file__).parent.parent)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))

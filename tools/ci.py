#!/usr/bin/env python3
# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the CI checks locally: format, lint, type check, tests, and build.

Pass step names to run a subset, e.g. ``tools/ci.py lint tests``.
"""

import pathlib
import subprocess
import sys
import time
from typing import NamedTuple

from yachalk import chalk

# ###############
# Public Interface
# ###############


class Step(NamedTuple):
    """A named CI step and the command that runs it."""

    key: str
    title: str
    command: list[str]


STEPS: list[Step] = [
    Step("format", "Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    Step("lint", "Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    Step("types", "Type check", ["uv", "run", "ty", "check", "src/"]),
    Step("tests", "Tests", ["uv", "run", "pytest", "--cov=rtshape", "--cov-report=term-missing"]),
    Step("build", "Build", ["uv", "build"]),
]


def main(argv: list[str] | None = None) -> int:
    """Run the selected CI steps (all by default) and report results."""
    selected = argv if argv is not None else sys.argv[1:]
    unknown = [key for key in selected if key not in {step.key for step in STEPS}]
    if unknown:
        known = ", ".join(step.key for step in STEPS)
        print(chalk.red(f"Unknown step(s): {', '.join(unknown)} (choose from: {known})"))
        return 2

    steps = [step for step in STEPS if not selected or step.key in selected]
    results: list[tuple[str, bool, float]] = [_run(step) for step in steps]

    _print_banner("Summary")
    for title, passed, elapsed in results:
        colour = chalk.green if passed else chalk.red
        print(colour(f"  {'PASS' if passed else 'FAIL'}  {title} ({elapsed:.1f}s)"))

    print()
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################

_RULE = "=" * 60


def _print_banner(title: str) -> None:
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue(f"  {title}"))
    print(chalk.blue(_RULE))


def _run(step: Step) -> tuple[str, bool, float]:
    _print_banner(step.title)
    start = time.monotonic()
    proc = subprocess.run(step.command, cwd=pathlib.Path(__file__).parent.parent)
    return step.title, proc.returncode == 0, time.monotonic() - start


if __name__ == "__main__":
    sys.exit(main())

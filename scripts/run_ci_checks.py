#!/usr/bin/env python3
# =============================================================================
# SIMDCHECK -- CI CHECKS RUNNER
# File:   scripts/run_ci_checks.py
# =============================================================================
#
# PURPOSE
# -------
# Runs the CI gate in two sequential stages:
#   Stage 1: pytest (all tests + coverage report for the simdcheck package)
#   Stage 2: usage example smoke run (two backends compared end to end)
#
# Exit codes:
#   0 -- All stages passed.
#   1 -- Stage 1 (pytest) failed.
#   2 -- Stage 2 (usage example) failed.
#
# Usage:
#   python scripts/run_ci_checks.py
# =============================================================================

from __future__ import annotations

import subprocess
import sys
import pathlib

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
_REPO_ROOT = pathlib.Path(__file__).parent.parent
_PYTHON    = sys.executable


def _separator(char: str = "=", width: int = 72) -> str:
    return char * width


def _run(cmd: list[str], label: str) -> int:
    """
    Run a subprocess command, stream stdout/stderr live, return exit code.
    """
    print(_separator())
    print(f"CI STAGE: {label}")
    print(f"CMD:      {' '.join(cmd)}")
    print(_separator("-"))
    sys.stdout.flush()

    proc = subprocess.run(
        cmd,
        cwd=str(_REPO_ROOT),
    )
    return proc.returncode


def _fail(stage: str, rc: int) -> None:
    print(_separator())
    print(f"CI RESULT: FAIL  [stage={stage}  exit_code={rc}]")
    print(f"Merge BLOCKED: {stage} stage did not pass.")
    print(_separator())
    sys.stdout.flush()


def main() -> int:
    print(_separator())
    print("SIMDCHECK CI GATE -- starting")
    print(_separator())
    sys.stdout.flush()

    # ------------------------------------------------------------------
    # Stage 1: pytest with coverage (requires the [test] extra).
    # ------------------------------------------------------------------
    pytest_rc = _run(
        [_PYTHON, "-m", "pytest", "--cov=simdcheck", "--cov-report=term-missing"],
        "pytest (tests + coverage)",
    )
    if pytest_rc != 0:
        _fail("pytest", pytest_rc)
        return 1

    print(_separator("-"))
    print("CI STAGE pytest: PASS")
    sys.stdout.flush()

    # ------------------------------------------------------------------
    # Stage 2: usage example. Exits non-zero if its comparison fails.
    # ------------------------------------------------------------------
    example_rc = _run(
        [_PYTHON, "usage_example.py"],
        "usage example (end-to-end comparison)",
    )
    if example_rc != 0:
        _fail("example", example_rc)
        return 2

    print(_separator("-"))
    print("CI STAGE example: PASS")

    print(_separator())
    print("CI RESULT: PASS  [stages=pytest,example]")
    print("Merge permitted.")
    print(_separator())
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())

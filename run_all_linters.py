#!/usr/bin/env python3
"""Run the FrameFlow quality checks in one go.

Formatting (black, isort), static analysis (ruff, pylint) and the pytest
suite run in order; every check runs even when an earlier one fails, and a
summary with the failing output is printed at the end.
"""

from pathlib import Path
import subprocess
import sys

ROOT = Path(__file__).parent
SOURCES = ["app", "core", "infrastructure", "main.py"]

CHECKS: list[tuple[str, list[str]]] = [
    ("black", ["black", ".", "--check"]),
    ("isort", ["isort", ".", "--check-only"]),
    ("ruff", ["ruff", "check", "."]),
    ("pylint", ["pylint", *SOURCES]),
    ("pytest", ["pytest", "-q"]),
]


def run_check(name: str, args: list[str]) -> tuple[bool, str]:
    """Run one tool as `python -m <args>`; returns (passed, combined output)."""
    cmd = [sys.executable, "-m", *args]
    print(f"\n--- {name}: {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=False, cwd=ROOT)
    except OSError as e:
        print(f"FAILED to start {name}: {e}")
        return False, str(e)

    output = (result.stdout + result.stderr).strip()
    passed = result.returncode == 0
    print("passed" if passed else f"failed (exit {result.returncode})")
    if output:
        print(output)
    return passed, output


def main() -> int:
    results = {name: run_check(name, args) for name, args in CHECKS}

    failed = [name for name, (passed, _) in results.items() if not passed]
    print("\n=== Summary")
    for name, (passed, _) in results.items():
        print(f"{name:<8} {'ok' if passed else 'FAILED'}")

    if failed:
        print(f"\n{len(failed)} check(s) failed: {', '.join(failed)}")
        return 1
    print("\nAll checks passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

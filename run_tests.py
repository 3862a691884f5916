#!/usr/bin/env python3
"""
Test runner for the spell duel battle simulator.

Runs the pytest suite, or one suite directory, or a single test module
found anywhere under tests/.
"""

import argparse
import subprocess
import sys
from pathlib import Path

TESTS_DIR = Path(__file__).parent / "tests"
SUITES = {
    "unit": ["tests/unit", "tests/core"],
    "game": ["tests/game"],
    "integration": ["tests/integration", "tests/test_main.py"],
    "edge": ["tests/edge_cases"],
}


def run_command(cmd: list[str], description: str) -> bool:
    """Run a command and report whether it succeeded."""
    print(f"=== {description} ===")
    print(f"Running: {' '.join(cmd)}")

    result = subprocess.run(cmd)
    if result.returncode == 0:
        print(f"{description} completed successfully\n")
        return True

    print(f"{description} failed with exit code {result.returncode}\n")
    return False


def pytest_command(targets: list[str], verbose: bool) -> list[str]:
    cmd = [sys.executable, "-m", "pytest", *targets]
    cmd.append("-v" if verbose else "-q")
    return cmd


def find_test_file(name: str) -> str:
    """Resolve 'battle_controller' or 'test_battle_controller.py' to a path under tests/."""
    if not name.startswith("test_"):
        name = f"test_{name}"
    if not name.endswith(".py"):
        name = f"{name}.py"

    matches = sorted(TESTS_DIR.rglob(name))
    if not matches:
        raise SystemExit(f"No test file named {name} under {TESTS_DIR}")
    return str(matches[0])


def main():
    parser = argparse.ArgumentParser(
        description="Test runner for the spell duel battle simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_tests.py                           # Run the whole suite
  python run_tests.py --quiet                   # Minimal output
  python run_tests.py --suite game              # Run one suite
  python run_tests.py --test attack_resolver    # Run one test module
        """
    )

    parser.add_argument(
        "--test",
        help="Run a specific test file (e.g. 'attack_resolver' for test_attack_resolver.py)"
    )
    parser.add_argument(
        "--suite",
        choices=sorted(SUITES),
        help="Run one suite only"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Run with minimal output"
    )

    args = parser.parse_args()
    verbose = not args.quiet

    if args.test:
        path = find_test_file(args.test)
        success = run_command(pytest_command([path], verbose), f"Test: {Path(path).name}")
    elif args.suite:
        success = run_command(pytest_command(SUITES[args.suite], verbose), f"Suite: {args.suite}")
    else:
        success = run_command(pytest_command(["tests/"], verbose), "All Tests")

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()

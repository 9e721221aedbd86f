#!/usr/bin/env python3
"""
Test runner for Insyte.

Usage:
    python run_tests.py                 # whole suite
    python run_tests.py -k retrieve     # extra arguments go to pytest
"""

import subprocess
import sys
import os


def run_tests(extra_args):
    """Run the test suite against the in-memory store"""
    print("🧪 Running Insyte Tests")
    print("=" * 40)

    os.chdir(os.path.dirname(os.path.abspath(__file__)))

    # Tests never need a live Redis
    env = dict(os.environ, STORE_BACKEND="memory")

    try:
        subprocess.run(
            [sys.executable, "-m", "pytest", "tests/", "-v", "--tb=short", *extra_args],
            check=True,
            env=env,
        )
        print("\n✅ All tests passed!")
        return 0

    except subprocess.CalledProcessError as e:
        print(f"\n❌ Tests failed with exit code {e.returncode}")
        return e.returncode
    except FileNotFoundError:
        print("❌ pytest not found. Install with: pip install -e '.[test]'")
        return 1


if __name__ == "__main__":
    sys.exit(run_tests(sys.argv[1:]))

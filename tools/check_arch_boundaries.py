#!/usr/bin/env python3
"""Run the layering checks from tests/test_arch_boundaries.py without pytest."""

from __future__ import annotations

import sys
from pathlib import Path

CHECKS = ("test_no_relative_imports", "test_layers_only_import_downwards")


def main() -> int:
    repo_root = Path(__file__).resolve().parents[1]
    test_path = repo_root / "tests" / "test_arch_boundaries.py"
    if not test_path.is_file():
        print("ERROR: tests/test_arch_boundaries.py not found.", file=sys.stderr)
        return 3

    ns: dict[str, object] = {"__file__": str(test_path), "__name__": "arch_boundaries"}
    exec(compile(test_path.read_text(encoding="utf-8"), str(test_path), "exec"), ns, ns)
    for name in CHECKS:
        fn = ns.get(name)
        if not callable(fn):
            print(f"ERROR: {name} not found.", file=sys.stderr)
            return 3
        try:
            fn()
        except AssertionError as e:
            print(str(e), file=sys.stderr)
            return 2
    print("OK: architecture boundaries respected.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""Regenerate docs/exit_codes.md for the dfcompress CLI.

The table (OK, USAGE, IO, BAD_HEADER, TRUNCATED) comes from
``dfcompress.errors.EXIT_CODES``. With ``--check`` nothing is written: the
script exits 1 when the committed doc no longer matches errors.py.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Regenerate docs/exit_codes.md from dfcompress.errors")
    p.add_argument("--check", action="store_true", help="Only verify the doc is up to date")
    ns = p.parse_args(argv)

    repo = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo / "src"))

    from dfcompress import errors  # noqa: E402

    out = repo / "docs" / "exit_codes.md"
    text = errors.render_exit_codes_markdown()

    if ns.check:
        current = out.read_text(encoding="utf-8") if out.is_file() else ""
        if current != text:
            print(f"[dfcompress] {out} is stale, run scripts/gen_exit_codes_md.py", file=sys.stderr)
            return 1
        print(f"[dfcompress] {out} up to date ({len(errors.EXIT_CODES)} exit codes)")
        return 0

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    print(f"[dfcompress] wrote {out} ({len(errors.EXIT_CODES)} exit codes)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

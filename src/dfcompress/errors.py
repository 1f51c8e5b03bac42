"""Typed errors for dfcompress.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

import zlib
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_IO = 10
EXIT_BAD_HEADER = 11
EXIT_TRUNCATED = 12


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (invalid args, invalid level, etc.)"),
    ExitCodeInfo(EXIT_IO, "IO", "I/O failure (read/write error, corrupt zlib data, unexpected error)"),
    ExitCodeInfo(EXIT_BAD_HEADER, "BAD_HEADER", "Invalid header (version is 0 or unknown compression)"),
    ExitCodeInfo(EXIT_TRUNCATED, "TRUNCATED", "Stream ended inside a header field, length prefix or chunk"),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE, do not edit manually.\n")
    lines.append("> Source of truth: `src/dfcompress/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Every conversion error extends `DFCompressError` and carries an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class DFCompressError(Exception):
    """Base error for dfcompress."""

    exit_code: int = EXIT_IO


class ConfigError(DFCompressError):
    exit_code = EXIT_USAGE


class CompressionUnknown(DFCompressError):
    exit_code = EXIT_BAD_HEADER

    def __init__(self, value: int):
        super().__init__(f"Unknown compression {value}")
        self.value = value


class VersionIsZero(DFCompressError):
    exit_code = EXIT_BAD_HEADER

    def __init__(self) -> None:
        super().__init__("Version is 0")


class UnexpectedEof(DFCompressError):
    exit_code = EXIT_TRUNCATED

    def __init__(self) -> None:
        super().__init__("Unexpected end-of-file")


class IoError(DFCompressError):
    """Underlying I/O failure; the original exception is kept as ``__cause__``."""

    exit_code = EXIT_IO


@contextmanager
def io_errors() -> Iterator[None]:
    """Convert OS/zlib failures raised inside the block into typed errors."""
    try:
        yield
    except EOFError as err:
        raise UnexpectedEof() from err
    except (OSError, zlib.error) as err:
        raise IoError(str(err) or type(err).__name__) from err

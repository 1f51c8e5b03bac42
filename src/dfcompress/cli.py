"""dfcompress CLI.

This is the stable CLI entrypoint (console-script: ``dfcompress``).

INPUT/OUTPUT default to ``-`` (standard input/output, binary). A file OUTPUT
is written to ``OUTPUT.part`` and moved into place only on success. Logs go
to stderr only: stdout may carry the converted stream.
"""

from __future__ import annotations

import argparse
import logging
import sys
from contextlib import ExitStack
from dataclasses import replace
from pathlib import Path

from dfcompress.config import ConvertConfig, load_config, parse_level
from dfcompress.core.codec_zlib import CodecZlib
from dfcompress.engine.chunked import atomic_output, compress_file, decompress_file, dfcompress, dfuncompress
from dfcompress.errors import EXIT_IO, EXIT_USAGE, ConfigError, DFCompressError, io_errors
from dfcompress.verify import inspect_file, inspect_stream

STDIO = "-"


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", default=None, help="Show stack traces on errors")
    p.add_argument("-v", "--verbose", action="store_true", default=None, help="Debug logging on stderr")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _convert(fn, file_fn, input_arg: str, output_arg: str, codec: CodecZlib) -> int:
    if input_arg != STDIO and output_arg != STDIO:
        file_fn(Path(input_arg), Path(output_arg), codec=codec)
        return 0

    with ExitStack() as stack:
        with io_errors():
            fin = sys.stdin.buffer if input_arg == STDIO else stack.enter_context(Path(input_arg).open("rb"))
            fout = sys.stdout.buffer if output_arg == STDIO else stack.enter_context(atomic_output(output_arg))
        fn(fin, fout, codec=codec)
        with io_errors():
            fout.flush()
    return 0


def _inspect(input_arg: str) -> int:
    rep = inspect_stream(sys.stdin.buffer) if input_arg == STDIO else inspect_file(Path(input_arg))
    print(rep.render())
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dfcompress", description="Convert save streams between raw and chunked-zlib form"
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    p_c = sub.add_parser("compress", help="Raw -> chunked zlib (chunked input is copied as-is)")
    p_c.add_argument("input", nargs="?", default=STDIO, help="Input file ('-' = stdin)")
    p_c.add_argument("output", nargs="?", default=STDIO, help="Output file ('-' = stdout)")
    p_c.add_argument("--level", default=None, help="zlib level -1..9 (default: $DFCOMPRESS_LEVEL or -1)")
    _add_common_args(p_c)

    p_d = sub.add_parser("decompress", help="Chunked zlib -> raw (raw input is copied as-is)")
    p_d.add_argument("input", nargs="?", default=STDIO, help="Input file ('-' = stdin)")
    p_d.add_argument("output", nargs="?", default=STDIO, help="Output file ('-' = stdout)")
    _add_common_args(p_d)

    p_i = sub.add_parser("inspect", help="Validate a save stream and print a summary")
    p_i.add_argument("input", nargs="?", default=STDIO, help="Input file ('-' = stdin)")
    _add_common_args(p_i)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    cfg = ConvertConfig()
    try:
        cfg = load_config()
        if getattr(ns, "level", None) is not None:
            cfg = replace(cfg, level=parse_level(ns.level))
        if ns.debug is not None:
            cfg = replace(cfg, debug=True)
        if ns.verbose is not None:
            cfg = replace(cfg, verbose=True)
        _setup_logging(cfg.verbose)

        if ns.cmd == "compress":
            return _convert(dfcompress, compress_file, ns.input, ns.output, CodecZlib(level=cfg.level))
        if ns.cmd == "decompress":
            return _convert(dfuncompress, decompress_file, ns.input, ns.output, CodecZlib())
        if ns.cmd == "inspect":
            return _inspect(ns.input)
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except ConfigError as e:
        if cfg.debug or ns.debug:
            raise
        print(f"[dfcompress] {e}", file=sys.stderr)
        return EXIT_USAGE
    except DFCompressError as e:
        if cfg.debug:
            raise
        print(f"[dfcompress] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_IO) or EXIT_IO)
    except Exception as e:
        if cfg.debug:
            raise
        print(f"[dfcompress] error: {e}", file=sys.stderr)
        return EXIT_IO


if __name__ == "__main__":
    raise SystemExit(main())

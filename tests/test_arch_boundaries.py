from __future__ import annotations

import ast
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

PACKAGE_ROOT = "dfcompress"

# Layer rank: a module may only import modules of the same or a lower rank.
#   0: errors, config, core.*
#   1: engine.*
#   2: verify, cli, __main__, package __init__ (orchestrators / public surface)
LAYERS: tuple[tuple[int, tuple[str, ...]], ...] = (
    (2, ("dfcompress.cli", "dfcompress.__main__", "dfcompress.verify")),
    (1, ("dfcompress.engine",)),
    (0, ("dfcompress.core", "dfcompress.errors", "dfcompress.config")),
)


@dataclass(frozen=True)
class ImportEdge:
    src: str
    dst: str
    file: Path
    lineno: int


def _rank(mod: str) -> int:
    if mod == PACKAGE_ROOT:
        return 2
    for rank, prefixes in LAYERS:
        if any(mod == p or mod.startswith(p + ".") for p in prefixes):
            return rank
    raise AssertionError(f"module without layer: {mod}")


def _module_name(src_dir: Path, py_file: Path) -> str:
    parts = list(py_file.relative_to(src_dir).with_suffix("").parts)
    if parts[-1] == "__init__":
        parts = parts[:-1]
    return ".".join(parts)


def _iter_import_edges(src_dir: Path) -> Iterable[ImportEdge]:
    for py in sorted((src_dir / PACKAGE_ROOT).rglob("*.py")):
        mod = _module_name(src_dir, py)
        tree = ast.parse(py.read_text(encoding="utf-8"), filename=str(py))
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                names = [a.name for a in node.names]
            elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
                names = [node.module]
            else:
                continue
            for name in names:
                if name == PACKAGE_ROOT or name.startswith(PACKAGE_ROOT + "."):
                    yield ImportEdge(src=mod, dst=name, file=py, lineno=node.lineno)


def test_no_relative_imports() -> None:
    src_dir = Path(__file__).resolve().parents[1] / "src"
    for py in (src_dir / PACKAGE_ROOT).rglob("*.py"):
        tree = ast.parse(py.read_text(encoding="utf-8"), filename=str(py))
        for node in ast.walk(tree):
            if isinstance(node, ast.ImportFrom):
                assert node.level == 0, f"{py}:{node.lineno} relative import"


def test_layers_only_import_downwards() -> None:
    """core -> engine -> cli/verify; never the other way round."""
    src_dir = Path(__file__).resolve().parents[1] / "src"
    if not (src_dir / PACKAGE_ROOT).is_dir():
        raise AssertionError(f"Expected src/{PACKAGE_ROOT} at: {src_dir}")

    violations = [
        e for e in _iter_import_edges(src_dir) if e.src != e.dst and _rank(e.dst) > _rank(e.src)
    ]
    if violations:
        lines = ["Forbidden imports detected (lower layer -> higher layer):"]
        for v in violations:
            lines.append(f"  {v.file}:{v.lineno}  {v.src}  ->  {v.dst}")
        raise AssertionError("\n".join(lines))

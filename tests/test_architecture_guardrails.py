from __future__ import annotations

import ast
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]


def _line_count(path: Path) -> int:
    return len(path.read_text(encoding="utf-8", errors="ignore").splitlines())


_SOURCE_DIRS = ("core", "infra", "tests")


def _python_files(root: Path):
    for path in root.rglob("*.py"):
        # Keep architecture checks focused on source/test code, not packaged artifacts.
        if path.relative_to(ROOT).parts[0] not in _SOURCE_DIRS:
            continue
        yield path


def _imported_modules(path: Path):
    tree = ast.parse(path.read_text(encoding="utf-8", errors="ignore"))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name
        elif isinstance(node, ast.ImportFrom) and node.level == 0:
            yield node.module or ""


def test_no_python_module_exceeds_hard_line_limit():
    offenders = []
    for path in _python_files(ROOT):
        lines = _line_count(path)
        if lines > 600:
            offenders.append((str(path.relative_to(ROOT)), lines))
    assert not offenders, f"Modules exceed hard 600-line limit: {offenders}"


def test_core_layer_does_not_import_infra_layer():
    violations: list[tuple[str, str]] = []

    for path in _python_files(ROOT / "core"):
        for name in _imported_modules(path):
            if name == "infra" or name.startswith("infra."):
                violations.append((str(path.relative_to(ROOT)), name))

    assert not violations, f"Core layer imports infra layer: {violations}"


def test_validation_does_not_depend_on_database_stack():
    violations: list[tuple[str, str]] = []

    for path in _python_files(ROOT / "core" / "validation"):
        for name in _imported_modules(path):
            if name.split(".")[0] in {"sqlalchemy", "sqlite3"}:
                violations.append((str(path.relative_to(ROOT)), name))

    assert not violations, f"Validation imports the database stack: {violations}"


def test_only_the_boundary_catches_broad_exceptions():
    allowed = {
        "core/errors/boundary.py",
        "core/errors/handler.py",
    }
    offenders = []

    for path in _python_files(ROOT / "core"):
        rel = path.relative_to(ROOT).as_posix()
        tree = ast.parse(path.read_text(encoding="utf-8", errors="ignore"))
        for node in ast.walk(tree):
            if not isinstance(node, ast.ExceptHandler):
                continue
            if node.type is None:
                offenders.append((rel, node.lineno, "bare except"))
            elif isinstance(node.type, ast.Name) and node.type.id in {"Exception", "BaseException"}:
                if rel not in allowed:
                    offenders.append((rel, node.lineno, node.type.id))

    assert not offenders, f"Broad exception handlers outside the error boundary: {offenders}"

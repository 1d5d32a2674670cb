from __future__ import annotations

import ast
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[4]


def _python_files(*parts: str) -> list[Path]:
    base = REPO_ROOT.joinpath(*parts)
    return [path for path in base.rglob("*.py") if "__pycache__" not in path.parts]


def _imports(path: Path, *, top_level_only: bool = False) -> list[str]:
    """Module names imported by ``path``; wildcard imports are reported as ``module:*``."""
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    nodes = tree.body if top_level_only else list(ast.walk(tree))
    found: list[str] = []
    for node in nodes:
        if isinstance(node, ast.Import):
            found.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module is not None:
            found.append(node.module)
            if any(alias.name == "*" for alias in node.names):
                found.append(f"{node.module}:*")
    return found


def _violations(paths: list[Path], rule, *, top_level_only: bool = False) -> list[str]:
    return [
        f"{path.relative_to(REPO_ROOT)} -> {target}"
        for path in paths
        for target in _imports(path, top_level_only=top_level_only)
        if rule(target)
    ]


def _is_package(target: str, package: str) -> bool:
    return target == package or target.startswith(f"{package}.")


@pytest.mark.parametrize(
    ("scope", "rule", "top_level_only"),
    [
        (("engine",), lambda target: _is_package(target, "seabattle"), False),
        (
            ("seabattle",),
            lambda target: _is_package(target, "engine") and not _is_package(target, "engine.api"),
            False,
        ),
        (("engine", "api"), lambda target: _is_package(target, "engine.runtime"), True),
    ],
    ids=["engine-is-game-agnostic", "game-uses-engine-api-only", "api-defers-runtime-imports"],
)
def test_layering(scope, rule, top_level_only) -> None:
    violations = _violations(_python_files(*scope), rule, top_level_only=top_level_only)
    assert not violations, "\n".join(violations)


def test_no_wildcard_imports() -> None:
    paths = _python_files("engine") + _python_files("seabattle")
    violations = _violations(paths, lambda target: target.endswith(":*"))
    assert not violations, "\n".join(violations)

from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

PACKAGE_ROOT = Path(__file__).resolve().parents[1] / "src" / "posm"

# layer -> modules it must never import
LAYER_POLICIES: dict[str, frozenset[str]] = {
    "domain": frozenset(
        {
            "fastapi",
            "pydantic",
            "sqlalchemy",
            "httpx",
            "starlette",
            "opentelemetry",
            "prometheus_client",
            "posm.api",
            "posm.application",
            "posm.client",
            "posm.infrastructure",
        }
    ),
    "application": frozenset(
        {
            "fastapi",
            "sqlalchemy",
            "httpx",
            "starlette",
            "posm.api",
            "posm.client",
            "posm.infrastructure",
        }
    ),
    "client": frozenset({"fastapi", "sqlalchemy", "posm.api", "posm.infrastructure"}),
}


@dataclass(frozen=True)
class Violation:
    file_path: Path
    line: int
    module: str


def _python_files(root: Path) -> Iterable[Path]:
    if root.is_file() and root.suffix == ".py":
        yield root
        return
    if root.is_dir():
        yield from sorted(root.rglob("*.py"))


def _matches_forbidden(module: str, forbidden_modules: frozenset[str]) -> bool:
    for forbidden in forbidden_modules:
        if module == forbidden or module.startswith(f"{forbidden}."):
            return True
    return False


def _scan_file(file_path: Path, forbidden_modules: frozenset[str]) -> list[Violation]:
    tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
    violations: list[Violation] = []

    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules = [alias.name for alias in node.names]
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            modules = [node.module]
        else:
            continue
        for module in modules:
            if _matches_forbidden(module, forbidden_modules):
                violations.append(Violation(file_path=file_path, line=node.lineno, module=module))

    return violations


def find_violations(
    paths: Sequence[Path],
    forbidden_modules: frozenset[str] = LAYER_POLICIES["domain"],
) -> list[Violation]:
    violations: list[Violation] = []
    for path in paths:
        for file_path in _python_files(path):
            violations.extend(_scan_file(file_path, forbidden_modules))
    return violations


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Layer import policy check for src/posm.")
    parser.add_argument(
        "--layer",
        choices=sorted(LAYER_POLICIES),
        action="append",
        default=[],
        help="Layer policy to enforce (repeatable). Defaults to every layer.",
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        help="Path to scan with the selected layer policies instead of the layer's package.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    layers = args.layer or sorted(LAYER_POLICIES)

    violations: list[Violation] = []
    for layer in layers:
        scan_paths = [Path(item) for item in args.path] if args.path else [PACKAGE_ROOT / layer]
        violations.extend(find_violations(scan_paths, LAYER_POLICIES[layer]))

    if not violations:
        print("depcheck passed")
        return 0

    print("depcheck failed: forbidden imports detected")
    for violation in violations:
        print(f"{violation.file_path}:{violation.line} -> {violation.module}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))

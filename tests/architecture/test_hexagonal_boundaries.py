"""Tests to enforce hexagonal architecture boundaries."""

import ast
from pathlib import Path
from typing import List, Set

import pytest

PACKAGE = "resource_matching"

pytestmark = pytest.mark.architecture


class ImportVisitor(ast.NodeVisitor):
    """AST visitor to collect import statements, excluding TYPE_CHECKING blocks."""

    def __init__(self):
        self.imports: Set[str] = set()

    def visit_If(self, node):
        if isinstance(node.test, ast.Name) and node.test.id == "TYPE_CHECKING":
            return
        self.generic_visit(node)

    def visit_Import(self, node):
        for alias in node.names:
            self.imports.add(alias.name)

    def visit_ImportFrom(self, node):
        if node.module and node.level == 0:
            self.imports.add(node.module)


def get_imports_from_file(file_path: Path) -> Set[str]:
    """Extract imports from a Python file."""
    tree = ast.parse(file_path.read_text(encoding="utf-8"))
    visitor = ImportVisitor()
    visitor.visit(tree)
    return visitor.imports


def get_python_files(directory: Path) -> List[Path]:
    """Get all Python files in a directory recursively."""
    if not directory.exists():
        return []
    return sorted(directory.rglob("*.py"))


def find_violations(project_root: Path, layer: str, forbidden: Set[str], allowed: Set[str] = frozenset()):
    violations = []
    for file_path in get_python_files(project_root / layer):
        for import_stmt in get_imports_from_file(file_path):
            if any(import_stmt.startswith(prefix) for prefix in allowed):
                continue
            if any(import_stmt == prefix or import_stmt.startswith(prefix + ".") for prefix in forbidden):
                violations.append(f"{file_path.relative_to(project_root)}: imports {import_stmt}")
    return violations


@pytest.fixture(scope="module")
def project_root() -> Path:
    """Get package root directory."""
    return Path(__file__).parent.parent.parent / PACKAGE


class TestHexagonalBoundaries:
    """Test hexagonal architecture boundary violations."""

    def test_domain_layer_purity(self, project_root):
        """Domain code depends on nothing but itself and the standard library."""
        violations = find_violations(
            project_root,
            "domain",
            forbidden={
                f"{PACKAGE}.application",
                f"{PACKAGE}.infrastructure",
                f"{PACKAGE}.api",
                f"{PACKAGE}.core",
                f"{PACKAGE}.database",
                "fastapi",
                "structlog",
            },
        )

        if violations:
            pytest.fail("Domain layer boundary violations found:\n" + "\n".join(violations))

    def test_application_layer_depends_only_on_abstractions(self, project_root):
        """Application services see repositories only through domain ports."""
        violations = find_violations(
            project_root,
            "application",
            forbidden={
                f"{PACKAGE}.infrastructure",
                f"{PACKAGE}.api",
                f"{PACKAGE}.database",
                "sqlmodel",
                "sqlalchemy",
                "fastapi",
            },
        )

        if violations:
            pytest.fail("Application layer boundary violations found:\n" + "\n".join(violations))

    def test_api_reaches_infrastructure_through_factories(self, project_root):
        """Routes never touch repositories or tables directly."""
        violations = find_violations(
            project_root,
            "api",
            forbidden={
                f"{PACKAGE}.infrastructure",
                f"{PACKAGE}.database",
                "sqlmodel",
                "sqlalchemy",
            },
            allowed={
                f"{PACKAGE}.infrastructure.factories",
                f"{PACKAGE}.infrastructure.providers",
            },
        )

        if violations:
            pytest.fail("API layer boundary violations found:\n" + "\n".join(violations))


class TestDomainModelPurity:
    """Test domain model purity and isolation."""

    def test_domain_has_no_database_concerns(self, project_root):
        """Domain code doesn't import SQLModel or database drivers."""
        forbidden_imports = {"sqlmodel", "sqlalchemy", "asyncpg", "alembic"}
        violations = []

        for file_path in get_python_files(project_root / "domain"):
            for import_stmt in get_imports_from_file(file_path):
                if import_stmt.split(".")[0] in forbidden_imports:
                    violations.append(f"{file_path.relative_to(project_root)}: imports {import_stmt}")

        if violations:
            pytest.fail("Domain entity purity violations found:\n" + "\n".join(violations))

    def test_value_objects_are_frozen_dataclasses(self, project_root):
        """Every value object class is declared ``@dataclass(frozen=True)``."""
        tree = ast.parse((project_root / "domain" / "value_objects.py").read_text(encoding="utf-8"))
        mutable = []

        for node in tree.body:
            if not isinstance(node, ast.ClassDef):
                continue
            frozen = any(
                isinstance(decorator, ast.Call)
                and getattr(decorator.func, "id", None) == "dataclass"
                and any(
                    keyword.arg == "frozen" and getattr(keyword.value, "value", False) is True
                    for keyword in decorator.keywords
                )
                for decorator in node.decorator_list
            )
            if not frozen:
                mutable.append(node.name)

        assert mutable == []

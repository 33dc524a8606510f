from collections.abc import Callable
from pathlib import Path

import pytest

TESTS_DATA_DIR = Path(__file__).parent / "data"

WriteFiles = Callable[[dict[str, str]], Path]


class TestProjectData:
    PROJECT: Path = TESTS_DATA_DIR / "employee_project"
    SCHEMA_DIR: Path = PROJECT / "src" / "main" / "resources" / "graphql"
    SOURCE_DIR: Path = PROJECT / "src" / "main" / "kotlin"
    PACKAGE_DIR: Path = SOURCE_DIR / "com" / "example" / "app"


def kotlin_resolver(function_name: str, type_name: str = "Query", field: str | None = None) -> str:
    """Kotlin function bound to type_name.field through @SchemaMapping."""
    return (
        f'    @SchemaMapping(typeName = "{type_name}", field = "{field or function_name}")\n'
        f"    fun {function_name}(): String? {{\n"
        f"        return null\n"
        f"    }}\n"
    )


def kotlin_controller(name: str, *functions: str, package: str = "com.example.app") -> str:
    body = "\n".join(functions)
    return f"package {package}\n\nclass {name} {{\n{body}}}\n"


@pytest.fixture
def write_files(tmp_path: Path) -> WriteFiles:
    """Write {relative path: content} under tmp_path and return tmp_path."""

    def _write(files: dict[str, str]) -> Path:
        for relative_path, content in files.items():
            path = tmp_path / relative_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture(scope="module")
def employee_project() -> Path:
    assert TestProjectData.SCHEMA_DIR.exists(), f"Missing test schema dir: {TestProjectData.SCHEMA_DIR}"
    assert TestProjectData.SOURCE_DIR.exists(), f"Missing test source dir: {TestProjectData.SOURCE_DIR}"
    return TestProjectData.PROJECT

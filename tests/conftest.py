"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest

from ainspector.core.functions import FunctionParser
from ainspector.core.languages import LanguageRegistry, build_language_registry

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: everything under tests/unit is a unit test
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def queries_dir() -> Path:
    """Return the path to the queries directory."""
    return _REPO_ROOT / "src" / "ainspector" / "queries"


@pytest.fixture
def registry() -> LanguageRegistry:
    return build_language_registry()


@pytest.fixture
def function_parser(registry: LanguageRegistry) -> FunctionParser:
    return FunctionParser(registry)


@pytest.fixture
def replace_patch() -> str:
    """One line replaced inside a four line file."""
    return "@@ -1,4 +1,4 @@\n line1\n-old_line\n+new_line\n line3\n line4"

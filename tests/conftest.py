"""
Global test configuration and fixtures
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from viewmodel_export.config import Settings
from viewmodel_export.parsing.unit import ParsedUnit


@pytest.fixture
def settings() -> Settings:
    """Default settings, isolated from the environment's .env file"""
    return Settings(_env_file=None)


@pytest.fixture
def write_corpus(tmp_path) -> Callable[[dict[str, str]], Path]:
    """
    Write a synthetic C# source tree.

    Usage:
        root = write_corpus({"Models/Order.cs": "public class Order { }"})
    """

    def _write(files: dict[str, str]) -> Path:
        root = tmp_path / "src"
        root.mkdir(exist_ok=True)
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _write


@pytest.fixture
def output_dir(tmp_path) -> Path:
    out = tmp_path / "out"
    out.mkdir()
    return out


@pytest.fixture
def parse_unit() -> Callable[..., ParsedUnit]:
    """Parse in-memory C# content into a unit"""

    def _parse(content: str, path: str = "/virtual/Model.cs") -> ParsedUnit:
        return ParsedUnit.from_content(path, content)

    return _parse


# Pytest hooks
def pytest_configure(config):
    """Register markers"""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (filesystem, full pipeline)")


def pytest_collection_modifyitems(config, items):
    """Add markers from the test path"""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

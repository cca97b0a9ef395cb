"""Shared test fixtures."""

import sys
from pathlib import Path
from typing import Any

import pytest

# Add project root to path for package imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

DRIVERS_DIR = PROJECT_ROOT / "drivers"


class MockContext:
    """Mock Context for testing without touching the real environment."""

    def __init__(self, env: dict[str, str] | None = None):
        self.env = env or {}
        self.env_reads: list[str] = []

    def get_env(self, key: str, default: str | None = None) -> str | None:
        """Return mocked environment variable."""
        self.env_reads.append(key)
        return self.env.get(key, default)


class FakeFlagGetter:
    """Parsed value exposing the generic get() capability."""

    def __init__(self, value: Any):
        self.value = value

    def get(self) -> Any:
        return self.value


class FakeCommandLine:
    """
    Command-line accessor backed by a plain dict.

    Entries are either FakeFlagGetter instances or raw lists, the way a parser
    exposes scalar and repeatable flags.
    """

    def __init__(self, data: dict[str, Any] | None = None):
        self.data = data or {}
        self.generic_reads: list[str] = []
        self.slice_reads: list[str] = []

    def generic(self, name: str) -> Any | None:
        self.generic_reads.append(name)
        return self.data.get(name)

    def string_slice(self, name: str) -> list[str] | None:
        self.slice_reads.append(name)
        value = self.data.get(name)
        return value if isinstance(value, list) else None


@pytest.fixture
def mock_context():
    """Factory fixture for creating MockContext instances."""
    def _create(**kwargs) -> MockContext:
        return MockContext(**kwargs)
    return _create


@pytest.fixture
def fake_command_line():
    """Factory fixture for creating FakeCommandLine instances."""
    def _create(data: dict[str, Any] | None = None) -> FakeCommandLine:
        return FakeCommandLine(data)
    return _create


@pytest.fixture
def drivers_dir() -> Path:
    """Path to the bundled driver manifests."""
    return DRIVERS_DIR

"""Pytest configuration and fixtures for formatr tests."""

import pytest

from formatr import Environment, api


@pytest.fixture(autouse=True)
def fresh_default_environment(monkeypatch):
    """Give every test its own module-level default Environment."""
    monkeypatch.setattr(api, "_default", None)


@pytest.fixture
def env():
    """Create a basic formatr Environment."""
    return Environment()


@pytest.fixture
def env_strict():
    """Create an Environment that raises on missing keys."""
    return Environment(on_missing="error")


@pytest.fixture
def env_with_templates():
    """Create an Environment with a few registered sub-templates."""
    return Environment(
        templates={
            "header": "== {title|upper} ==",
            "footer": "-- {author}",
            "greeting": "Hello {user.name}",
            "nested": "[{> greeting}]",
        }
    )


def assert_contains(result: str, *expected_parts: str) -> None:
    """Assert rendered output contains all expected parts.

    Args:
        result: The actual rendering result.
        expected_parts: Strings that should all be present in the result.
    """
    for part in expected_parts:
        assert part in result, (
            f"Template output missing expected content:\n"
            f"  Missing: {part!r}\n"
            f"  Actual: {result!r}"
        )

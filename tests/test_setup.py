"""Basic test to verify project setup."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.mark.fast
def test_project_imports() -> None:
    """Test that the main package can be imported."""
    import a2a_testcontainers

    assert a2a_testcontainers.__version__ == "0.1.0"


@pytest.mark.fast
def test_public_api_exports() -> None:
    import a2a_testcontainers

    for name in a2a_testcontainers.__all__:
        assert hasattr(a2a_testcontainers, name), name

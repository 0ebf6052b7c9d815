import pytest
import kinship


@pytest.fixture
def registry():
    """Fresh registry for each test."""
    return kinship.Registry()

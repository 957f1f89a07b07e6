import pytest

from autotemp.config import ControlConfig


@pytest.fixture
def default_config() -> ControlConfig:
    """Provides the stock configuration (floor 35, ramp 66, max 90, step 5)."""
    return ControlConfig()


@pytest.fixture
def fast_config() -> ControlConfig:
    """Provides the stock ramp with a short interval for loop tests."""
    return ControlConfig(interval_ms=10)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "hardware: marks tests as hardware tests (may require physical hardware)")
    config.addinivalue_line("markers", "slow: marks tests as slow running")

"""
Root-level conftest for pytest configuration
"""
from blockjuic3.logging_config import configure_logging


def pytest_configure(config):
    """Configure pytest"""
    # Async tests run without an explicit marker too
    config.option.asyncio_mode = "auto"

    configure_logging("DEBUG")

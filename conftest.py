import pytest
from loguru import logger

from string_processor.core.logger import PACKAGE_NAME


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    # cli.main and configure_logging replace sinks globally
    logger.remove()
    logger.disable(PACKAGE_NAME)


@pytest.fixture
def log_records():
    """Records logged by the package while the test runs"""
    records = []
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG", format="{message}")
    yield records
    logger.remove(handler_id)
    logger.disable(PACKAGE_NAME)

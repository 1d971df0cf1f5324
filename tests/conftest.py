from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from libsql_config.utils.logging import ROOT_LOGGER_NAME

here = Path(__file__).parent
root_path = here.parent


@pytest.fixture(autouse=True)
def restore_package_logger() -> Generator[None, None, None]:
    """Undo ``configure_logging`` calls so log capture keeps working across tests."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate

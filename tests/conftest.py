from __future__ import annotations

import logging
from typing import Generator

import pytest


@pytest.fixture(autouse=True)
def _reset_depmatrix_logging() -> Generator[None, None, None]:
    """Undo CLI logging setup so caplog sees depmatrix records."""
    yield

    import depmatrix.utils.logger as logger_module

    root_logger = logging.getLogger("depmatrix")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
    logger_module._logging_configured = False

# tests/conftest.py
from __future__ import annotations

import logging

import pytest
from loguru import logger


@pytest.fixture
def caplog(caplog: pytest.LogCaptureFixture):
    """Route loguru records into pytest's caplog."""
    handler_id = logger.add(
        caplog.handler,
        format="{message}",
        level=0,
        filter=lambda record: record["level"].no >= caplog.handler.level,
        enqueue=False,
    )
    caplog.set_level(logging.DEBUG)
    yield caplog
    logger.remove(handler_id)

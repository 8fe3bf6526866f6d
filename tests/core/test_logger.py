"""Tests for loguru configuration."""

import sys

import pytest
from loguru import logger

from completion_guide.core.logger import format_extra, setup_logger


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


def test_format_extra_sorts_keys():
    assert format_extra({"week_number": 2, "day": "M"}) == "day=M week_number=2"
    assert format_extra({}) == ""


def test_file_sink_includes_context(tmp_path, restore_logger):
    log_file = tmp_path / "logs" / "guide.log"

    setup_logger(level="INFO", log_file=str(log_file))
    logger.debug("hidden")
    logger.info("Packed items", week_count=3, note="{braces}")
    logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "hidden" not in content
    assert "Packed items | note={braces} week_count=3" in content

import io
import json

import pytest

from cukeslicer.logging.structured_logger import LoggerFactory


@pytest.fixture(autouse=True)
def log_stream():
    """Route every structured log entry of a test into an in-memory stream"""
    stream = io.StringIO()
    LoggerFactory.configure(level="DEBUG", format_style="json", stream=stream)
    yield stream
    LoggerFactory.reset()


@pytest.fixture
def log_entries(log_stream):
    def read_entries(level=None):
        entries = [json.loads(line) for line in log_stream.getvalue().splitlines() if line.strip()]
        if level:
            entries = [entry for entry in entries if entry["level"] == level]
        return entries

    return read_entries

# Ensure project root is on sys.path for tests
import io
import sys, pathlib
import pytest

root = pathlib.Path(__file__).resolve().parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

from wildbattle.core.logging import logger


@pytest.fixture(autouse=True)
def captured_log():
    """Route the project logger into a buffer so test output stays clean."""
    buf = io.StringIO()
    saved_stream, saved_threshold = logger.stream, logger.threshold
    logger.stream = buf
    logger.set_level("DEBUG")
    yield buf
    logger.stream = saved_stream
    logger.threshold = saved_threshold

import logging
from collections.abc import Iterator

import pytest
import structlog

from curvegen.log import configure_library_logging


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers bound to a test's captured streams once it finishes."""
    yield
    structlog.reset_defaults()
    configure_library_logging()
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

import logging
import sys

from loguru import logger

from config.logger import InterceptHandler, configure_loguru


def test_configure_loguru_routes_stdlib_logging_at_warning() -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_loguru()

        assert [type(handler) for handler in root.handlers] == [InterceptHandler]
        assert root.level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
        logger.remove()
        logger.add(sys.stderr)

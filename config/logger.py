import logging
import sys
import types
from loguru import logger
from config.app_settings import settings


def configure_loguru():
    logger.remove()
    logger.configure(
        handlers=[  # type: ignore
            {
                "sink": sys.stdout,
                "level": settings.LOG_LEVEL,
                "format": (
                    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                    "<level>{level}</level> | "
                    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
                    "<level>{message}</level>"
                ),
                "colorize": True,
            },
        ]
    )

    logging.basicConfig(handlers=[InterceptHandler()], force=True)
    _suppress_third_party_logs()


def _suppress_third_party_logs() -> None:
    base_suppress_map: dict[str, str] = {
        "httpx": "WARNING",
        "httpcore": "WARNING",
        "asyncio": "WARNING",
        "urllib3": "WARNING",
    }

    http_verbose_map: dict[str, str] = {
        "httpx": "INFO",
        "httpcore": "INFO",
    }

    for logger_name, level in base_suppress_map.items():
        effective_level: str = http_verbose_map.get(logger_name, level) if settings.LOG_VERBOSE_HTTP else level
        logging.getLogger(logger_name).setLevel(effective_level)

    # silence noisy info logs from libraries using the root logger
    logging.getLogger().setLevel("WARNING")


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            loguru_level = logger.level(record.levelname).name
        except ValueError:
            loguru_level = record.levelno

        frame: types.FrameType | None = logging.currentframe()
        depth = 2
        logging_file = getattr(logging, "__file__", None)
        while frame and logging_file and frame.f_code.co_filename == logging_file:
            frame = frame.f_back
            depth += 1

        if record.levelno >= _resolve_level(settings.LOG_LEVEL):
            logger.opt(depth=depth, exception=record.exc_info).log(loguru_level, record.getMessage())


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level

    mapping = logging.getLevelNamesMapping()
    resolved = mapping.get(level.upper())
    if isinstance(resolved, int):
        return resolved

    raise ValueError(f"Unknown log level: {level}")

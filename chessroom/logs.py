import sys

from loguru import logger


def setup_logging(level: str = "INFO") -> None:
    """Оставляет один вывод в stderr с нужным уровнем."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{function} - {message}",
    )

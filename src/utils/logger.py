import sys

from loguru import logger

from config.settings import settings


def setup_logger(*, json_logs: bool | None = None, level: str | None = None) -> None:
    """Configure loguru for the screener.

    Console goes to stderr so stdout carries only the screening result.
    File sink (if configured) always captures DEBUG for post-mortem analysis.
    """
    if json_logs is None:
        json_logs = settings.json_logs
    console_level = (level or settings.log_level).upper()
    logger.remove()

    if json_logs:
        logger.add(sys.stderr, serialize=True, level=console_level)
    else:
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
                "<level>{message}</level>"
            ),
            level=console_level,
            colorize=True,
        )

    if settings.log_file:
        logger.add(
            settings.log_file,
            rotation="50 MB",
            retention="3 days",
            compression="gz",
            level="DEBUG",
            serialize=json_logs,
        )

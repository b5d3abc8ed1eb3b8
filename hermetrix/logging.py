"""
Logging configuration.
Uvicorn and application logger levels; AI and pipeline failures go through logger.exception
(hermetrix/services/ai_client.py, hermetrix/services/report_pipeline.py).
"""
import logging
import sys

# The OpenAI SDK logs every HTTP round trip through these at INFO
_CHATTY_LOGGERS = ("httpx", "httpcore", "openai")


def setup_logging(
    level: int | str = logging.INFO,
    format_string: str | None = None,
) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.INFO
    if format_string is None:
        format_string = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    logging.basicConfig(
        level=level,
        format=format_string,
        stream=sys.stdout,
        force=True,
    )
    # Keep uvicorn access/error loggers in step with the app
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level)
    logging.getLogger("hermetrix").setLevel(level)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

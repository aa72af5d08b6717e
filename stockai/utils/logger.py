import logging
import os
from typing_extensions import override

LEVEL_COLORS = {
    "DEBUG": "\033[34m",  # Blue
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
}

QUIET_LOGGERS = ("watchdog", "urllib3", "httpx", "httpcore")


class ColorFormatter(logging.Formatter):
    @override
    def format(self, record: logging.LogRecord):
        record.levelname_color = LEVEL_COLORS.get(record.levelname, "\033[0m") + record.levelname + "\033[0m"
        return super().format(record)


def setup_logging():
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    formatter = ColorFormatter(
        "\033[36m%(asctime)s\033[0m - \033[32m%(name)s\033[0m - %(levelname_color)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # streamlit reruns the script on every interaction
    if not any(isinstance(h.formatter, ColorFormatter) for h in root_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel("ERROR")

import logging
from logging import CRITICAL, DEBUG, ERROR, INFO, WARNING

from ordbok.constant import PrintColour as PC


class CustomFormatter(logging.Formatter):
    FORMAT = "%(asctime)s %(levelname)s %(message)s"

    FORMATS = {
        DEBUG: FORMAT,
        INFO: FORMAT,
        WARNING: PC.YELLOW.value + FORMAT + PC.RESET.value,
        ERROR: PC.RED.value + FORMAT + PC.RESET.value,
        CRITICAL: PC.RED.value + FORMAT + PC.RESET.value,
    }

    def format(self, record: logging.LogRecord) -> str:
        log_fmt = self.FORMATS.get(record.levelno, self.FORMAT)
        formatter = logging.Formatter(log_fmt)
        return formatter.format(record)


logger = logging.getLogger("ordbok")
logger.setLevel(INFO)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(CustomFormatter())
    logger.addHandler(handler)

__all__ = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "CustomFormatter", "logger"]

import logging
import sys
from typing import TextIO


class Log:
    """Centralized logging for docsync.

    Keyword arguments are appended to the message as key=value context,
    e.g. ``Log.info("Upload complete", task="3f2a", document="9c1e")`` logs
    ``Upload complete task=3f2a document=9c1e``.
    """

    _logger: logging.Logger = logging.getLogger("docsync")
    _format = "%(asctime)s [%(levelname)s] %(message)s"

    @classmethod
    def configure(cls, log_level: str, stream: TextIO | None = None) -> None:
        """Set the level and attach a single stream handler (stdout by default)."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(stream or sys.stdout)
            handler.setFormatter(logging.Formatter(cls._format))
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        """Log an info message."""
        cls._log(logging.INFO, message, context)

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        """Log an error message."""
        cls._log(logging.ERROR, message, context)

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        """Log a warning message."""
        cls._log(logging.WARNING, message, context)

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        """Log a debug message."""
        cls._log(logging.DEBUG, message, context)

    @classmethod
    def _log(cls, level: int, message: str, context: dict[str, object]) -> None:
        if not cls._logger.isEnabledFor(level):
            return
        pairs = " ".join(f"{key}={value}" for key, value in context.items() if value is not None)
        cls._logger.log(level, f"{message} {pairs}" if pairs else message)

import logging
from logging.handlers import RotatingFileHandler
import os

LOG_FILENAME = "datainsights.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


# Helper to get log level from environment variable
def _get_level_from_env(default: int = logging.INFO) -> int:
    level_name = os.getenv("LOG_LEVEL", "").upper()
    if not level_name:
        return default
    return getattr(logging, level_name, default)


def _log_path() -> str:
    log_dir = os.getenv("LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)
    return os.path.join(log_dir, LOG_FILENAME)


def _has_file_handler(logger: logging.Logger, log_path: str) -> bool:
    for h in logger.handlers:
        if isinstance(h, RotatingFileHandler):
            try:
                if os.path.samefile(getattr(h, "baseFilename", ""), log_path):
                    return True
            except OSError:
                pass
    return False


def _attach_file_handler(logger: logging.Logger, log_path: str, level: int) -> None:
    if _has_file_handler(logger, log_path):
        return
    handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger.
    Records propagate to the root logger, which setup_app_logging() points at
    the rotating log file. Respects LOG_LEVEL.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_get_level_from_env())
    return logger


# Attach rotating file handler to Flask's app.logger
def setup_app_logging(app) -> None:
    """Attach rotating file handler to Flask's app.logger and the root logger.
    Respects LOG_DIR and LOG_LEVEL.
    """
    log_path = _log_path()
    level = _get_level_from_env()

    app.logger.setLevel(level)
    app.logger.propagate = False
    _attach_file_handler(app.logger, log_path, level)

    # Route non-app loggers (services.*) to the same file, silence default console output
    root = logging.getLogger()
    for h in list(root.handlers):
        if not isinstance(h, RotatingFileHandler):
            root.removeHandler(h)
    root.setLevel(level)
    _attach_file_handler(root, log_path, level)

    # Reduce noisy werkzeug logs to WARNING and prevent propagation to console
    wlog = logging.getLogger("werkzeug")
    for h in list(wlog.handlers):
        wlog.removeHandler(h)
    wlog.setLevel(logging.WARNING)
    wlog.propagate = False

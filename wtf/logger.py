import logging
import os
from logging.handlers import RotatingFileHandler

from rich.console import Console
from rich.logging import RichHandler

from .config import Config

LOG_FILE_NAME = "wtf.log"

_handlers = []


def setup_logging(config: Config) -> None:
    """
    Set up logging for the application.

    Everything goes to stderr or the log file. Stdout is reserved for the
    command in raw mode.
    """
    root_logger = logging.getLogger()
    # Calling twice (e.g. in tests) replaces the handlers installed before.
    for handler in _handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _handlers.clear()

    level = logging.INFO if config.verbose else logging.WARNING
    root_logger.setLevel(level)

    # Console handler (with Rich)
    console = Console(stderr=True)
    rich_handler = RichHandler(
        console=console,
        show_time=config.verbose,
        show_path=False,
        rich_tracebacks=True
    )
    rich_handler.setLevel(level)
    _handlers.append(rich_handler)

    # File handler (Rotating)
    try:
        os.makedirs(config.log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(config.log_dir, LOG_FILE_NAME), maxBytes=1024*1024, backupCount=3  # 1 MB per file, 3 backups
        )
    except OSError as e:
        file_handler = None
        file_error = e
    else:
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        _handlers.append(file_handler)

    for handler in _handlers:
        root_logger.addHandler(handler)

    # Configure specific loggers to be less verbose
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    if file_handler is None:
        logger.warning(f"File logging disabled, could not open {config.log_dir}: {file_error}")
    else:
        logger.info(f"Logger initialized. Logs will be stored in {config.log_dir}")

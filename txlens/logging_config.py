"""
Logging configuration for txlens.
Supports normal mode (concise console) and debug mode (verbose file output).
"""
import logging
import sys
import os
from pathlib import Path

# Debug mode: set TXLENS_DEBUG=1 to enable verbose pipeline logging
TXLENS_DEBUG = os.getenv('TXLENS_DEBUG', '').lower() in ('1', 'true', 'yes')

# Debug log file path
DEBUG_LOG_PATH = Path(__file__).parent.parent / 'txlens_debug.log'

DEBUG_FILE_HANDLER_NAME = 'txlens_debug_file'


class ConciseFormatter(logging.Formatter):
    """Single-line, concise log format."""

    FORMATS = {
        logging.DEBUG: "\033[90m[D]\033[0m %(name)s: %(message)s",
        logging.INFO: "\033[32m[I]\033[0m %(message)s",
        logging.WARNING: "\033[33m[W]\033[0m %(message)s",
        logging.ERROR: "\033[31m[E]\033[0m %(name)s: %(message)s",
        logging.CRITICAL: "\033[31;1m[!]\033[0m %(name)s: %(message)s",
    }

    def format(self, record):
        log_fmt = self.FORMATS.get(record.levelno, self.FORMATS[logging.INFO])
        formatter = logging.Formatter(log_fmt)
        return formatter.format(record)


class VerboseFormatter(logging.Formatter):
    """Detailed format for debug file logging."""
    def __init__(self):
        super().__init__(
            fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )


def setup_logging(level=logging.INFO, debug: bool = TXLENS_DEBUG):
    """
    Configure logging for the entire application.
    Call this once at startup (app.py / decode_logs.py).

    Set TXLENS_DEBUG=1 (or pass debug=True) to also write verbose
    pipeline logs to txlens_debug.log.
    """
    # Silence noisy third-party loggers
    noisy_loggers = [
        'urllib3', 'aiohttp', 'websockets', 'asyncio', 'httpcore', 'httpx',
        'web3', 'web3.providers', 'web3.RequestManager', 'web3.manager',
        'uvicorn.access', 'shiny',
    ]
    for logger_name in noisy_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ConciseFormatter())
    root.addHandler(handler)

    app_logger = logging.getLogger('txlens')
    app_logger.setLevel(level)

    if debug:
        setup_debug_file_logging()
        app_logger.info(f"TXLENS_DEBUG enabled - verbose logs written to {DEBUG_LOG_PATH}")

    return app_logger


def setup_debug_file_logging():
    """
    Attach a verbose file handler to the txlens.services logger tree.
    Safe to call more than once; the handler is only added the first time.
    """
    services_logger = logging.getLogger('txlens.services')
    services_logger.setLevel(logging.DEBUG)
    if any(getattr(h, 'name', None) == DEBUG_FILE_HANDLER_NAME for h in services_logger.handlers):
        return

    file_handler = logging.FileHandler(DEBUG_LOG_PATH, mode='w', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(VerboseFormatter())
    file_handler.name = DEBUG_FILE_HANDLER_NAME
    services_logger.addHandler(file_handler)

"""Logging configuration and utilities."""

import logging
import logging.handlers
import sys
import time
from pathlib import Path
from typing import Optional, Dict, Any


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m'
    }

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None,
                 use_colors: bool = True, stream=None):
        super().__init__(fmt, datefmt)
        stream = stream or sys.stderr
        self.use_colors = use_colors and hasattr(stream, 'isatty') and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors if enabled."""
        levelname = record.levelname

        if self.use_colors and levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"

        result = super().format(record)
        record.levelname = levelname

        return result


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    log_dir: Optional[str] = None,
    console: bool = True,
    colors: bool = True,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5,
    quiet: bool = False
) -> logging.Logger:
    """
    Configure logging for the genome_explorer namespace.

    Console output goes to stderr so that command output on stdout stays
    machine-readable. A rotating log file is only written when ``log_dir``
    is given.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Custom log file name inside ``log_dir``
        log_dir: Directory for log files; no file logging when None
        console: Enable console output
        colors: Enable colored console output
        max_bytes: Maximum log file size before rotation
        backup_count: Number of backup files to keep
        quiet: Suppress all but error logs to console

    Returns:
        The package root logger
    """
    level = getattr(logging, log_level.upper())
    root_logger = logging.getLogger('genome_explorer')

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.setLevel(logging.DEBUG)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path / (log_file or 'genome_explorer.log'),
            maxBytes=max_bytes,
            backupCount=backup_count
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        root_logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.ERROR if quiet else level)
        console_handler.setFormatter(ColoredFormatter(
            '%(levelname)s - %(message)s',
            use_colors=colors,
            stream=sys.stderr
        ))
        root_logger.addHandler(console_handler)

    root_logger.debug(f"Logging initialized - Level: {log_level}")
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(f"genome_explorer.{name}")


def log_api_call(api_name: str, endpoint: str, params: Optional[Dict[str, Any]],
                 response_time: float, success: bool, status_code: Optional[int] = None):
    """Log API call details."""
    logger = logging.getLogger('genome_explorer.api')
    status = f", status: {status_code}" if status_code is not None else ""

    if success:
        logger.debug(
            f"API call: {api_name} - {endpoint} "
            f"(params: {params}, response_time: {response_time:.2f}s{status})"
        )
    else:
        logger.error(
            f"API call failed: {api_name} - {endpoint} "
            f"(params: {params}, response_time: {response_time:.2f}s{status})"
        )


class LogTimer:
    """Context manager for timing operations."""

    def __init__(self, operation: str, logger: Optional[logging.Logger] = None):
        """
        Initialize timer.

        Args:
            operation: Operation description
            logger: Logger to use (defaults to performance logger)
        """
        self.operation = operation
        self.logger = logger or logging.getLogger('genome_explorer.performance')
        self.start_time = None
        self.elapsed = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is not None:
            self.elapsed = time.perf_counter() - self.start_time
            if exc_type is None:
                self.logger.debug(f"{self.operation} completed in {self.elapsed:.2f}s")
            else:
                self.logger.debug(f"{self.operation} failed after {self.elapsed:.2f}s")

"""
Logging utilities for the recovery wallet ledger
"""

import logging
import logging.handlers
from typing import Optional, Dict, Any
from pathlib import Path
import json
import time
import threading

from ..exceptions.chain_errors import ConfigError

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def __init__(self, include_context: bool = True):
        super().__init__()
        self.include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        log_data = {
            'timestamp': time.time(),
            'level': record.levelname,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line_no': record.lineno,
            'logger': record.name
        }

        # structured fields passed through extra={'structured_data': {...}}
        structured = getattr(record, 'structured_data', None)
        if structured:
            log_data.update(structured)

        if self.include_context:
            log_data['thread_name'] = threading.current_thread().name

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)

class LogManager:
    """Centralized log management"""

    def __init__(self, name: str = "RecoveryWallet", level: str = "INFO",
                 fmt: str = DEFAULT_FORMAT, json_format: bool = False,
                 log_file: Optional[str] = None, max_size: int = 10 * 1024 * 1024,
                 backup_count: int = 5):
        self.name = name
        self.level = level
        self.fmt = fmt
        self.json_format = json_format
        self.log_file = log_file
        self.max_size = max_size
        self.backup_count = backup_count

        self.logger = logging.getLogger(name)
        self._setup_logging()

    def _make_formatter(self) -> logging.Formatter:
        if self.json_format:
            return JSONFormatter()
        return logging.Formatter(self.fmt)

    def _setup_logging(self) -> None:
        """Setup logging configuration"""
        level = getattr(logging, self.level.upper(), logging.INFO)
        self.logger.setLevel(level)

        # Clear existing handlers
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(self._make_formatter())
        self.logger.addHandler(console_handler)

        if self.log_file:
            self._add_file_handler()

        self.logger.propagate = False

    def _add_file_handler(self) -> None:
        """Add file handler with rotation"""
        try:
            log_path = Path(self.log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                self.log_file,
                maxBytes=self.max_size,
                backupCount=self.backup_count
            )
            file_handler.setLevel(self.logger.level)
            file_handler.setFormatter(JSONFormatter())
            self.logger.addHandler(file_handler)

        except OSError as e:
            raise ConfigError(f"Failed to setup file logging: {e}", self.log_file)

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """Get logger instance"""
        if name:
            return logging.getLogger(f"{self.name}.{name}")
        return self.logger

    def log_audit(self, event: str, user: Optional[str] = None,
                  details: Optional[Dict[str, Any]] = None) -> None:
        """Log audit events"""
        audit_data = {
            'event': event,
            'user': user,
            'type': 'audit'
        }
        if details:
            audit_data.update(details)

        self.logger.info(f"Audit: {event}", extra={'structured_data': audit_data})

def setup_logging(config) -> LogManager:
    """Setup logging from a LoggingConfig section"""
    log_file = None
    if config.file_enabled:
        log_file = str(Path(config.file_path) / config.file)

    return LogManager(
        name="RecoveryWallet",
        level=config.level,
        fmt=config.format,
        json_format=config.json_format,
        log_file=log_file,
        max_size=config.max_size,
        backup_count=config.backup_count
    )

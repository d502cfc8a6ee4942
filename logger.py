"""
Structured Logging System for CalcPad.
Console, rotating file and error-file handlers with JSON payloads
for the structured fields attached to each record.
"""
import logging
import logging.handlers
import time
import json
import traceback
from pathlib import Path
from typing import Optional, Dict, Any, Union
from enum import Enum, auto
from datetime import datetime
import uuid


class LogLevel(Enum):
    """Log levels mirroring the standard logging levels."""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class LogCategory(Enum):
    """Categories attached to calculator log records."""
    SYSTEM = auto()
    USER_ACTION = auto()
    INPUT = auto()
    CALCULATION = auto()
    DISPLAY = auto()
    CONFIG = auto()


class StructuredFormatter(logging.Formatter):
    """Formatter that appends structured fields as JSON."""

    def __init__(self, include_json=True):
        super().__init__()
        self.include_json = include_json

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        basic_line = f"[{timestamp}] {record.levelname:8} {record.name}: {record.getMessage()}"

        structured_data = {}
        for key, value in record.__dict__.items():
            if key.startswith('attr_') or key in ['category', 'session_id']:
                structured_data[key] = value

        if record.exc_info:
            structured_data['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': traceback.format_exception(*record.exc_info)
            }

        structured_data['location'] = {
            'filename': record.filename,
            'line': record.lineno,
            'function': record.funcName
        }

        if self.include_json:
            json_data = json.dumps(structured_data, default=str, ensure_ascii=False)
            return f"{basic_line} | {json_data}"
        return basic_line


class CalcPadLogger:
    """Session-aware logger for CalcPad."""

    def __init__(self, name: str = "calcpad", log_dir: Optional[Path] = None):
        self.name = name
        self.session_id = str(uuid.uuid4())[:8]

        if log_dir is None:
            log_dir = Path.home() / "CalcPad" / "logs"
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self._setup_loggers()

        self.info("CalcPad logging system initialized",
                  category=LogCategory.SYSTEM,
                  log_dir=str(self.log_dir))

    def _setup_loggers(self):
        """Setup main logger and handlers."""
        self.logger = logging.getLogger(self.name)
        self.logger.setLevel(logging.DEBUG)

        # A logger re-created for a new directory must release the old files
        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(StructuredFormatter(include_json=False))
        self.logger.addHandler(console_handler)

        file_handler = logging.handlers.RotatingFileHandler(
            self.log_dir / f"{self.name}.log", maxBytes=5*1024*1024, backupCount=3,
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(StructuredFormatter(include_json=True))
        self.logger.addHandler(file_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            self.log_dir / f"{self.name}_errors.log", maxBytes=1024*1024, backupCount=3,
            encoding="utf-8"
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(StructuredFormatter(include_json=True))
        self.logger.addHandler(error_handler)

    def _log(self, level: int, message: str, category: Union[LogCategory, str, None] = None,
             exception: Optional[Exception] = None, **kwargs):
        """Internal logging method attaching session and structured fields."""
        if isinstance(category, LogCategory):
            category_name = category.name
        elif category:
            category_name = str(category).upper()
        else:
            category_name = 'GENERAL'

        extra = {
            'session_id': self.session_id,
            'category': category_name
        }
        for key, value in kwargs.items():
            if not key.startswith('_'):
                extra[f'attr_{key}'] = value

        if exception:
            self.logger.log(level, message, exc_info=(type(exception), exception, exception.__traceback__), extra=extra)
        else:
            self.logger.log(level, message, extra=extra)

    def debug(self, message: str, category: Union[LogCategory, str, None] = None, **kwargs):
        """Log debug message."""
        self._log(LogLevel.DEBUG.value, message, category, **kwargs)

    def info(self, message: str, category: Union[LogCategory, str, None] = None, **kwargs):
        """Log info message."""
        self._log(LogLevel.INFO.value, message, category, **kwargs)

    def warning(self, message: str, category: Union[LogCategory, str, None] = None, **kwargs):
        """Log warning message."""
        self._log(LogLevel.WARNING.value, message, category, **kwargs)

    def error(self, message: str, exception: Optional[Exception] = None,
              category: Union[LogCategory, str, None] = None, **kwargs):
        """Log error message."""
        self._log(LogLevel.ERROR.value, message, category, exception, **kwargs)

    def log_user_action(self, action: str, details: Optional[Dict[str, Any]] = None):
        """Log user actions such as key presses."""
        log_data = {
            'action': action,
            'timestamp': time.time()
        }
        if details:
            log_data.update(details)
        self._log(LogLevel.DEBUG.value, f"USER ACTION: {action}",
                  LogCategory.USER_ACTION, **log_data)

    def log_calculation(self, operator: str, left: float, right: float, result: float):
        """Log a completed binary operation."""
        self._log(LogLevel.INFO.value, f"CALCULATION: {left!r} {operator} {right!r} = {result!r}",
                  LogCategory.CALCULATION, operator=operator, left=left, right=right, result=result)

    def log_calculation_error(self, kind: str, message: str, **kwargs):
        """Log a failed binary operation."""
        self._log(LogLevel.WARNING.value, f"CALCULATION FAILED: {message}",
                  LogCategory.CALCULATION, kind=kind, **kwargs)

    def get_session_id(self) -> str:
        """Get the current session ID."""
        return self.session_id

    def set_log_level(self, level: Union[str, int, LogLevel]):
        """Set the logging level."""
        if isinstance(level, LogLevel):
            level = level.value
        elif isinstance(level, str):
            level = getattr(logging, level.upper())
        self.logger.setLevel(level)
        self.info(f"Log level set to: {logging.getLevelName(level)}", category=LogCategory.SYSTEM)

    def cleanup_old_logs(self, days_to_keep: int = 30) -> int:
        """Remove log files older than ``days_to_keep`` days."""
        removed_count = 0
        try:
            cutoff_time = time.time() - (days_to_keep * 24 * 3600)
            for log_file in self.log_dir.glob("*.log*"):
                if log_file.stat().st_mtime < cutoff_time:
                    log_file.unlink()
                    removed_count += 1
            self.info(f"Cleaned up {removed_count} old log files",
                      category=LogCategory.SYSTEM,
                      removed_count=removed_count,
                      days_to_keep=days_to_keep)
        except OSError as e:
            self.error("Failed to cleanup old logs", exception=e, category=LogCategory.SYSTEM)
        return removed_count


# Global logger instance
_global_logger: Optional[CalcPadLogger] = None


def get_logger() -> CalcPadLogger:
    """Get the global logger instance."""
    global _global_logger
    if _global_logger is None:
        _global_logger = CalcPadLogger()
    return _global_logger


def setup_logger(name: str = "calcpad", log_dir: Optional[Path] = None) -> CalcPadLogger:
    """Set up and return the global logger."""
    global _global_logger
    _global_logger = CalcPadLogger(name, log_dir)
    return _global_logger


class LoggableMixin:
    """Mixin class to add logging capabilities to other classes."""

    def __init__(self):
        self._logger = get_logger()
        self._module_name = self.__class__.__name__

    def log_debug(self, message: str, **kwargs):
        """Log debug message."""
        self._logger.debug(f"[{self._module_name}] {message}", **kwargs)

    def log_warning(self, message: str, **kwargs):
        """Log warning message."""
        self._logger.warning(f"[{self._module_name}] {message}", **kwargs)

    def log_user_action(self, action: str, details: Optional[Dict[str, Any]] = None):
        """Log user action."""
        action_details = {'module': self._module_name}
        if details:
            action_details.update(details)
        self._logger.log_user_action(action, action_details)

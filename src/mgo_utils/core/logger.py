"""
Leveled logger with Rich console output, file logging and named-key timers.
"""

import os
import sys
import time
import inspect
import datetime
import threading
from enum import Enum
from typing import Dict, Optional, Union
from rich.console import Console
from mgo_utils.core import config


class LogLevel(Enum):
    TRACE = "TRACE"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    SUCCESS = "SUCCESS"
    TIME = "TIME"


_LEVEL_STYLES = {
    LogLevel.TRACE: "dim cyan",
    LogLevel.INFO: "dim bright_white",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
    LogLevel.SUCCESS: "green",
    LogLevel.TIME: "magenta",
}


def _caller_location() -> str:
    """Return `file:line` of the first frame outside this module."""
    frame = inspect.currentframe()
    try:
        while frame is not None and frame.f_code.co_filename == __file__:
            frame = frame.f_back
        if frame is None:
            return "?:0"
        return f"{os.path.basename(frame.f_code.co_filename)}:{frame.f_lineno}"
    finally:
        del frame


class Logger:
    def __init__(self, log_file: Optional[str] = None, log_dir: Optional[str] = None,
                 timing: Optional[bool] = None):
        if log_dir is None:
            log_dir = config.LOG_DIR
        if log_file is None:
            log_file = config.LOG_FILE
        if timing is None:
            timing = config.DEBUG_TIMING
        self._log_dir = os.path.join(os.getcwd(), log_dir)
        self._log_file = os.path.join(self._log_dir, log_file)
        self.timing = timing
        self.console = Console()

        # Coarse lock over both maps; every timer call contends on it.
        self._timer_lock = threading.Lock()
        self._time_start: Dict[str, float] = {}
        self._time_end: Dict[str, float] = {}

        os.makedirs(self._log_dir, exist_ok=True)

    @property
    def log_file(self) -> str:
        return self._log_file


    def _format_message(self, level: LogLevel, message: str, location: str = "") -> str:
        """Format the log message with timestamp, level and caller location."""
        timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        if location:
            return f"{timestamp} | {level.value} | {location} | {message}"
        return f"{timestamp} | {level.value} | {message}"


    def _write_to_file(self, message: str):
        """Write the log message to the log file."""
        try:
            raw_message = str(message).replace('\n', ' ')
            with open(self._log_file, "a", encoding="utf-8") as f:
                f.write(raw_message + "\n")
        except OSError as e:
            self.console.print(f"[red]Error writing to log file: {e}[/red]")


    def _print_to_console(self, level: LogLevel, message: str):
        """Print the log message to the console with appropriate styling."""
        self.console.print(message, style=_LEVEL_STYLES[level], markup=False, emoji=False)


    def log(self, level: LogLevel, message: str):
        """Log a message with the specified log level."""
        formatted = self._format_message(level, str(message), _caller_location())
        self._write_to_file(formatted)
        if level is not LogLevel.TRACE:
            self._print_to_console(level, str(message))

    def trace(self, message: str):
        """Log a trace message."""
        self.log(LogLevel.TRACE, message)

    def info(self, message: str):
        """Log an informational message."""
        self.log(LogLevel.INFO, message)

    def warning(self, message: str):
        """Log a warning message."""
        self.log(LogLevel.WARNING, message)

    def error(self, message: Union[str, BaseException]):
        """Log an error message or exception."""
        self.log(LogLevel.ERROR, message)

    def success(self, message: str):
        """Log a success message."""
        self.log(LogLevel.SUCCESS, message)

    def fatal(self, message: Union[str, BaseException]):
        """Log an error and stop the program with exit status 1."""
        self.log(LogLevel.ERROR, message)
        sys.exit(1)


    #! ---- Named-key timers ---- !#

    def start(self, key: str):
        """Record the start time for `key`."""
        if not self.timing:
            return
        with self._timer_lock:
            self._time_start[key] = time.perf_counter()

    def _stop(self, key: str) -> Optional[float]:
        with self._timer_lock:
            started = self._time_start.get(key)
            if started is None:
                return None
            ended = time.perf_counter()
            self._time_end[key] = ended
            return ended - started

    def end(self, key: str) -> float:
        """Record the end time for `key` and log the elapsed time."""
        if not self.timing:
            return 0.0
        elapsed = self._stop(key)
        if elapsed is None:
            self.warning(f"Timer '{key}' was never started")
            return 0.0
        self.log(LogLevel.TIME, f"[{key}] {elapsed:.6f}s")
        return elapsed

    def end_get(self, key: str) -> float:
        """Record the end time for `key` and return the elapsed seconds."""
        if not self.timing:
            return 0.0
        elapsed = self._stop(key)
        if elapsed is None:
            self.warning(f"Timer '{key}' was never started")
            return 0.0
        return elapsed


#! ---- Process-wide instance ---- !#
# Created once on first use and never torn down. Components take an explicit
# logger and only fall back to this one when none is given.

_instance: Optional[Logger] = None
_instance_lock = threading.Lock()


def init_logger(log_file: Optional[str] = None, log_dir: Optional[str] = None,
                timing: Optional[bool] = None) -> Logger:
    """Create the shared logger. Later calls return the existing instance."""
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = Logger(log_file=log_file, log_dir=log_dir, timing=timing)
        return _instance


def get_logger() -> Logger:
    """Return the shared logger, creating a default one if needed."""
    if _instance is not None:
        return _instance
    return init_logger()

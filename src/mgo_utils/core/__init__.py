"""Core utilities package (config, logger, timing)."""
from . import config
from .logger import Logger, LogLevel, init_logger, get_logger
from .timing import running_time, track, timed

__all__ = ["config", "Logger", "LogLevel", "init_logger", "get_logger", "running_time", "track", "timed"]

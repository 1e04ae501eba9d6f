"""mgo utilities: command runner, leveled logger with timers, filesystem helpers."""

__version__ = "1.0"

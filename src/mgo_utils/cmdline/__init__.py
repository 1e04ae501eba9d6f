"""
Command execution package.
"""

from .runner import CommandRunner, CommandResult, CommandError, CommandLogError, ExecutionMode, run_command

__all__ = ["CommandRunner", "CommandResult", "CommandError", "CommandLogError", "ExecutionMode", "run_command"]

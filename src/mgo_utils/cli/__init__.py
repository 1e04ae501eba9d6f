"""
CLI package exposing CLI classes and argument parsing.
"""

from .cli import UtilsCLI
from .argparse_config import parse_args
from .commands import CommandHandler

__all__ = ["UtilsCLI", "parse_args", "CommandHandler"]

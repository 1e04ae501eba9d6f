"""
Small text helpers: MD5 digests and console line input.
"""

import hashlib
from typing import Optional
from rich.console import Console

_console = Console()


def md5_hash(text: str) -> str:
    """Return the hex MD5 digest of `text` encoded as UTF-8."""
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def read_line(prompt: str = "", console: Optional[Console] = None) -> str:
    """Read one line typed in the console; empty string on EOF or read error."""
    console = console or _console
    try:
        return console.input(prompt)
    except (EOFError, OSError) as e:
        console.print(f"[red]Error reading input: {e or 'end of input'}[/red]")
        return ""

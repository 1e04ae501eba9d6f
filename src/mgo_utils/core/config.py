"""
Configuration and constants for the mgo utilities.
"""

import os, sys, json
from typing import Optional


#! ---- Default configuration values ---- !#

VERSION = "1.0"

LOG_DIR = "logs/"
LOG_FILE = "app.log"

# Directory for per-invocation command logs. Empty string means the
# system temp directory (tempfile.gettempdir()).
CMD_LOG_DIR = ""
CMD_LOG_PREFIX = "mgo_cmd_"

# Named-key timers (Logger.start/end/end_get) are no-ops unless enabled.
DEBUG_TIMING = False

# When true, a failure to open or write a command log file terminates the
# process instead of raising CommandLogError.
FAIL_FAST_ON_LOG_ERROR = False

# Copy directory entries in name order instead of filesystem order.
SORT_COPY_ENTRIES = True



#! ---- Helper functions to load and override config from JSON file ---- !#

def _source_root() -> Optional[str]:
    """Return the project root when running from a checkout, else None."""
    root = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))
    if os.path.exists(os.path.join(root, "pyproject.toml")):
        return root
    return None


def _owns_config_dir() -> bool:
    """True when a default config.json may be written next to the program."""
    return bool(getattr(sys, "frozen", False)) or _source_root() is not None


def _get_config_path() -> str:
    """Get the path to the config.json file.

    Frozen builds read it beside the executable and checkouts read it at the
    project root. Installed copies read `config.json` in the working directory.
    """
    if getattr(sys, "frozen", False):
        base = os.path.dirname(sys.executable)
    else:
        base = _source_root() or os.getcwd()
    return os.path.join(base, "config.json")


def _write_default_config(path: str) -> None:
    """Write the default configuration to a JSON file."""
    defaults = {
        "VERSION": VERSION,
        "LOG_DIR": LOG_DIR,
        "LOG_FILE": LOG_FILE,
        "CMD_LOG_DIR": CMD_LOG_DIR,
        "CMD_LOG_PREFIX": CMD_LOG_PREFIX,
        "DEBUG_TIMING": DEBUG_TIMING,
        "FAIL_FAST_ON_LOG_ERROR": FAIL_FAST_ON_LOG_ERROR,
        "SORT_COPY_ENTRIES": SORT_COPY_ENTRIES,
    }
    try:
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(defaults, fh, indent=2, ensure_ascii=False)
    except OSError:
        pass


def _load_json_config():
    """Load configuration overrides from a JSON file."""
    path = _get_config_path()
    if not os.path.exists(path):
        if _owns_config_dir():
            _write_default_config(path)
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError):
        return
    if not isinstance(data, dict):
        return

    global VERSION, LOG_DIR, LOG_FILE, CMD_LOG_DIR, CMD_LOG_PREFIX
    global DEBUG_TIMING, FAIL_FAST_ON_LOG_ERROR, SORT_COPY_ENTRIES

    if isinstance(data.get("VERSION"), str):
        VERSION = data.get("VERSION")

    if isinstance(data.get("LOG_DIR"), str):
        LOG_DIR = data.get("LOG_DIR")
    if isinstance(data.get("LOG_FILE"), str):
        LOG_FILE = data.get("LOG_FILE")

    if isinstance(data.get("CMD_LOG_DIR"), str):
        CMD_LOG_DIR = data.get("CMD_LOG_DIR")
    if isinstance(data.get("CMD_LOG_PREFIX"), str) and data.get("CMD_LOG_PREFIX"):
        CMD_LOG_PREFIX = data.get("CMD_LOG_PREFIX")

    if isinstance(data.get("DEBUG_TIMING"), bool):
        DEBUG_TIMING = data.get("DEBUG_TIMING")
    if isinstance(data.get("FAIL_FAST_ON_LOG_ERROR"), bool):
        FAIL_FAST_ON_LOG_ERROR = data.get("FAIL_FAST_ON_LOG_ERROR")
    if isinstance(data.get("SORT_COPY_ENTRIES"), bool):
        SORT_COPY_ENTRIES = data.get("SORT_COPY_ENTRIES")

_load_json_config()

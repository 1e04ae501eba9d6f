"""
Argument parsing for the mgo utilities CLI.
"""

import sys
import argparse


def parse_args():
    """Parse command-line arguments. Returns None when no arguments are given."""
    parser = argparse.ArgumentParser(description="mgo utilities: command runner and filesystem helpers")

    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-r", "--run",
        type=str,
        metavar="COMMAND",
        help="Run a system command and capture its stdout/stderr"
    )
    group.add_argument(
        "-c", "--copy",
        nargs=2,
        metavar=("SRC", "DST"),
        help="Recursively copy directory SRC to DST, preserving modes and mtimes (symlinks are skipped)"
    )
    group.add_argument(
        "--md5",
        type=str,
        metavar="TEXT",
        help="Print the MD5 digest of TEXT"
    )
    group.add_argument(
        "--exists",
        type=str,
        metavar="PATH",
        help="Report whether PATH is an existing file or directory"
    )

    parser.add_argument(
        "--shell",
        action="store_true",
        help="Run the command through /bin/sh so quoted arguments may contain spaces (shell metacharacters are interpreted)"
    )
    parser.add_argument(
        "--display",
        action="store_true",
        help="Print command output live instead of collecting it"
    )
    parser.add_argument(
        "--log",
        action="store_true",
        help="Also write command output to a per-invocation log file in the temp directory"
    )
    parser.add_argument(
        "--crush",
        action="store_true",
        help="Allow copying into an existing destination, overwriting files at matching paths"
    )
    parser.add_argument(
        "--timing",
        action="store_true",
        help="Enable named-key timers and log elapsed times"
    )

    args = parser.parse_args()

    if len(sys.argv) == 1:
        return None

    if args.run is None and (args.shell or args.display or args.log):
        print("Error: --shell, --display and --log require --run")
        sys.exit(1)

    if args.copy is None and args.crush:
        print("Error: --crush requires --copy")
        sys.exit(1)

    if args.run is not None and not args.run.strip():
        print("Error: --run requires a non-empty command")
        sys.exit(1)

    return args

"""
External command execution with line-by-line output capture.
"""

import os
import time
import tempfile
import itertools
import threading
import subprocess
from enum import Enum
from dataclasses import dataclass
from typing import IO, List, Optional, Union
from mgo_utils.core import config
from mgo_utils.core.logger import Logger, get_logger


class ExecutionMode(Enum):
    # Whitespace split: first token is the program. Cannot express arguments
    # that contain spaces.
    SPLIT = "split"
    # Handed to /bin/sh -c: quoting, pipes and shell metacharacters are live.
    SHELL = "shell"


class CommandError(RuntimeError):
    """Raised when a command cannot be started or its output cannot be read."""


class CommandLogError(CommandError):
    """Raised when the per-invocation log file cannot be opened or written."""


@dataclass
class CommandResult:
    output: str
    returncode: int
    log_path: Optional[str] = None


_log_seq = itertools.count(1)


def command_log_path() -> str:
    """Build a unique log file path for one command invocation.

    The name carries the nanosecond timestamp, the pid and a per-process
    sequence number, so runs within one clock tick still get separate files.
    """
    log_dir = config.CMD_LOG_DIR or tempfile.gettempdir()
    name = f"{config.CMD_LOG_PREFIX}{time.time_ns()}_{os.getpid()}_{next(_log_seq)}.log"
    return os.path.join(log_dir, name)


class CommandRunner:
    """Run system commands, capturing stdout then stderr into one buffer.

    A runner can be reused; the output buffer is reset at the start of each
    `run` call. With `display` set, lines are printed as they arrive and the
    returned output is empty.

    Example::

        runner = CommandRunner().use_multi_args()
        result = runner.run('rsync -ahv -e "ssh -p 2222" --rsync-path="sudo rsync" src/ host:dst/')
    """

    def __init__(self, display: bool = False, mode: ExecutionMode = ExecutionMode.SPLIT,
                 use_log: bool = False, logger: Optional[Logger] = None,
                 fail_fast: Optional[bool] = None):
        self.display = display
        self.mode = mode
        self.use_log = use_log
        self.logger = logger or get_logger()
        self.fail_fast = config.FAIL_FAST_ON_LOG_ERROR if fail_fast is None else fail_fast
        self.out_buffer = ""
        self._log_fh: Optional[IO[str]] = None

    def use_multi_args(self) -> "CommandRunner":
        """Switch to the shell execution strategy (arguments with spaces)."""
        self.mode = ExecutionMode.SHELL
        return self

    def _build_command(self, command: str) -> Union[str, List[str]]:
        if self.mode is ExecutionMode.SHELL:
            if not command.strip():
                raise CommandError("Empty command")
            return command
        args = command.split()
        if not args:
            raise CommandError("Empty command")
        return args

    def _log_failure(self, message: str, exc: OSError):
        if self.fail_fast:
            self.logger.fatal(f"{message}: {exc}")
        raise CommandLogError(f"{message}: {exc}") from exc

    def _open_log(self) -> str:
        path = command_log_path()
        try:
            self._log_fh = open(path, "a", encoding="utf-8")
        except OSError as e:
            self._log_failure(f"Unable to open command log {path}", e)
        return path

    def _close_log(self):
        if self._log_fh is None:
            return
        try:
            self._log_fh.close()
        except OSError as e:
            self.logger.error(f"Error closing command log: {e}")
        finally:
            self._log_fh = None

    def _emit(self, line: str):
        """Display or buffer one output line, teeing it to the log file."""
        if self.display:
            # written as-is so tabs and control characters reach the console unchanged
            out = self.logger.console.file
            out.write(line + "\n")
            out.flush()
        else:
            self.out_buffer += line + "\n"

        if self._log_fh is not None:
            try:
                self._log_fh.write(line + "\n")
            except OSError as e:
                self._log_failure("Error writing command log", e)

    def run(self, command: str) -> CommandResult:
        """Run `command` to completion and return its captured output."""
        self.out_buffer = ""
        args = self._build_command(command)
        shell = self.mode is ExecutionMode.SHELL

        try:
            process = subprocess.Popen(
                args,
                shell=shell,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise CommandError(f"Unable to start command '{command}': {e}") from e

        self.logger.trace(f"Started pid={process.pid} mode={self.mode.value}: {command}")

        # stderr is collected concurrently so a child that fills the stderr
        # pipe cannot stall while stdout is drained. Lines are emitted after
        # stdout, never interleaved chronologically.
        stderr_lines: List[str] = []
        stderr_errors: List[BaseException] = []

        def _drain_stderr():
            try:
                for raw in process.stderr:
                    stderr_lines.append(raw.rstrip("\r\n"))
            except (OSError, ValueError) as exc:
                stderr_errors.append(exc)

        reader = threading.Thread(target=_drain_stderr, daemon=True)
        reader.start()

        log_path = None
        try:
            if self.use_log:
                log_path = self._open_log()

            try:
                for raw in process.stdout:
                    self._emit(raw.rstrip("\r\n"))
            except (OSError, ValueError) as e:
                raise CommandError(f"Error reading stdout of '{command}': {e}") from e

            reader.join()
            if stderr_errors:
                raise CommandError(f"Error reading stderr of '{command}': {stderr_errors[0]}") from stderr_errors[0]

            for line in stderr_lines:
                self._emit(line)
        except BaseException:
            process.kill()
            raise
        finally:
            self._close_log()
            returncode = process.wait()
            reader.join()
            process.stdout.close()
            process.stderr.close()

        self.logger.trace(f"Finished pid={process.pid} returncode={returncode}")
        return CommandResult(output=self.out_buffer, returncode=returncode, log_path=log_path)


def run_command(command: str, multi_args: bool = False, display: bool = False,
                use_log: bool = False, logger: Optional[Logger] = None) -> CommandResult:
    """Run `command` once with a fresh runner."""
    mode = ExecutionMode.SHELL if multi_args else ExecutionMode.SPLIT
    runner = CommandRunner(display=display, mode=mode, use_log=use_log, logger=logger)
    return runner.run(command)

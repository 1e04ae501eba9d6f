"""
Command handling for the mgo utilities CLI.
"""

from typing import Dict, List, Optional
from mgo_utils.core.logger import Logger, get_logger
from mgo_utils.core.timing import timed
from mgo_utils.cmdline import CommandRunner, CommandError, ExecutionMode
from mgo_utils.fsutils import copy_dir, md5_hash, file_exists, dir_exists


class CommandHandler:
    def __init__(self, logger: Optional[Logger] = None):
        self.logger = logger or get_logger()


    def handle_run(self, command: str, shell: bool = False, display: bool = False,
                   use_log: bool = False) -> List[Dict[str, str]]:
        mode = ExecutionMode.SHELL if shell else ExecutionMode.SPLIT
        runner = CommandRunner(display=display, mode=mode, use_log=use_log, logger=self.logger)
        self.logger.info(f"Running ({mode.value}): {command}")
        self.logger.start("run")
        try:
            result = runner.run(command)
        except CommandError as e:
            self.logger.error(f"Failed to run {command}: {e}")
            return [{"task": "Run", "target": command, "status": "Failed", "message": str(e)}]
        finally:
            self.logger.end("run")

        lines = []
        status = "Success"
        if result.returncode != 0:
            self.logger.warning(f"Command exited with status {result.returncode}: {command}")
            status = "Failed"
            lines.append(f"exit status {result.returncode}")
        if result.output:
            lines.append(result.output.rstrip("\n"))
        if result.log_path:
            lines.append(f"Log: {result.log_path}")
        return [{"task": "Run", "target": command, "status": status, "message": "\n".join(lines)}]

    def handle_copy(self, source: str, destination: str, crush: bool = False) -> List[Dict[str, str]]:
        self.logger.info(f"Copying directory: {source} -> {destination}")
        try:
            with timed(f"copy {source}", self.logger):
                copy_dir(source, destination, crush=crush, logger=self.logger)
        except OSError as e:
            self.logger.error(f"Failed to copy {source}: {e}")
            return [{"task": "Copy", "target": source, "status": "Failed", "message": str(e)}]
        self.logger.success(f"Copied {source} -> {destination}")
        return [{"task": "Copy", "target": source, "status": "Success", "message": f"-> {destination}"}]

    def handle_md5(self, text: str) -> List[Dict[str, str]]:
        return [{"task": "MD5", "target": text, "status": "Success", "message": md5_hash(text)}]

    def handle_exists(self, path: str) -> List[Dict[str, str]]:
        if file_exists(path):
            kind = "file"
        elif dir_exists(path):
            kind = "directory"
        else:
            self.logger.warning(f"Path not found: {path}")
            return [{"task": "Exists", "target": path, "status": "Failed", "message": "not found"}]
        return [{"task": "Exists", "target": path, "status": "Success", "message": kind}]

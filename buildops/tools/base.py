"""
Common behaviour for tool runners.
"""
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple

from ..config import load_config, logger
from ..utils import format_command, run_command


class ToolRunner:
    """
    Runs one external executable in a fixed working directory.

    Subclasses set ``tool`` to their key in the ``tools`` config section,
    which names the executable to run.
    """

    tool: str = ""

    def __init__(self, cwd=".", dry_run: bool = False, executable: Optional[str] = None):
        self.cwd = str(cwd)
        self.dry_run = dry_run
        if executable is None:
            executable = load_config().get("tools", {}).get(self.tool) or self.tool
        self.executable = executable

    def command(self, *args) -> List[str]:
        return [self.executable, *[str(a) for a in args if a is not None]]

    def _run(self, args: List[str], cwd=None) -> Tuple[bool, str]:
        """
        Runs a command built by ``command``.

        Returns:
            (success, message): stdout on success, stderr (or stdout) on failure.
        """
        cwd = str(cwd) if cwd is not None else self.cwd
        try:
            output = run_command(args, cwd=cwd, dry_run=self.dry_run, capture_output=True)
        except subprocess.CalledProcessError as e:
            message = (e.stderr or e.output or "").strip() or f"exit code {e.returncode}"
            return False, f"{format_command(args)} failed: {message}"
        if self.dry_run:
            return True, f"Dry run: would run {format_command(args)}"
        return True, output or ""

    def _query(self, args: List[str]) -> Optional[str]:
        """Runs a read-only command, even in dry-run mode. None on failure."""
        try:
            output = run_command(args, cwd=self.cwd, capture_output=True, check=True, log_stderr=False)
        except subprocess.CalledProcessError as e:
            logger.debug(f"{format_command(args)} failed: {e}")
            return None
        return output

    def path(self, *parts) -> Path:
        return Path(self.cwd, *parts)

"""
Shared utility functions for buildops: process execution and file helpers.
"""
import shlex
import shutil
import subprocess
from pathlib import Path

from .config import logger

BACKUP_SUFFIX = ".backup"


def format_command(command):
    """Returns a printable form of a command given as a string or argument list."""
    if isinstance(command, str):
        return command
    return shlex.join(str(arg) for arg in command)


def run_command(command, cwd=".", dry_run=False, capture_output=False, check=True, log_stderr=True, env=None):
    """
    Runs an external command and logs the output.

    Args:
        command (str | list): An argument list, run without a shell, or a
            string, run through the shell.
        cwd (str): The working directory for this invocation only.
        dry_run (bool): If True, log the command without executing.
        capture_output (bool): If True, return stdout.
        check (bool): If True, raise CalledProcessError on non-zero exit codes.
        log_stderr (bool): If False, do not log stderr as an error.
        env (dict): Optional environment for the child process.

    Returns:
        str: The command's stdout if capture_output is True, otherwise None.
    """
    display = format_command(command)
    if dry_run:
        logger.info(f"[Dry Run] Would run command in '{cwd}': {display}")
        return "Dry run output" if capture_output else None

    if not isinstance(command, str):
        command = [str(arg) for arg in command]

    logger.debug(f"Running command in '{cwd}': {display}")
    try:
        result = subprocess.run(
            command,
            shell=isinstance(command, str),
            capture_output=True,
            text=True,
            cwd=cwd,
            env=env,
            check=False,  # Disable check here to handle output manually
            encoding='utf-8'
        )
    except FileNotFoundError as e:
        # Executable (or cwd) missing: surface it like a failed command
        if log_stderr:
            logger.error(f"Could not run '{display}': {e}")
        if check:
            raise subprocess.CalledProcessError(127, display, output="", stderr=str(e)) from e
        return "" if capture_output else None

    if result.stdout and result.stdout.strip():
        logger.debug(result.stdout.strip())

    if result.returncode != 0:
        if log_stderr:
            logger.error(f"Command failed with exit code {result.returncode}: {display}")
            if result.stderr and result.stderr.strip():
                logger.error(f"Stderr: {result.stderr.strip()}")
        if check:
            raise subprocess.CalledProcessError(
                result.returncode, display, output=result.stdout, stderr=result.stderr
            )

    return (result.stdout or "").strip() if capture_output else None


def read_text_file(path):
    """Reads a whole file as UTF-8 text, keeping its line endings."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_text_file(path, content):
    """Overwrites a file with UTF-8 text, without newline translation."""
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def backup_file(path):
    """
    Copies a file to a '.backup' sibling.

    Returns:
        Path: The path of the backup copy.
    """
    path = Path(path)
    backup_path = path.with_name(path.name + BACKUP_SUFFIX)
    shutil.copy2(path, backup_path)
    logger.debug(f"Backed up {path} to {backup_path}")
    return backup_path


def copy_path(source, destination, dry_run=False):
    """Copies a file or a directory tree. Existing destination trees are merged."""
    source, destination = Path(source), Path(destination)
    if dry_run:
        logger.info(f"[Dry Run] Would copy {source} to {destination}")
        return destination
    if source.is_dir():
        shutil.copytree(source, destination, dirs_exist_ok=True)
    else:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)
    return destination


def remove_path(path, dry_run=False):
    """
    Deletes a file or a directory tree.

    Returns:
        bool: True if something was removed.
    """
    path = Path(path)
    if not path.exists() and not path.is_symlink():
        return False
    if dry_run:
        logger.info(f"[Dry Run] Would remove {path}")
        return True
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()
    return True

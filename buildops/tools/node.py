"""
npm / yarn / pnpm wrapper.
"""
from typing import Optional, Tuple

from .base import ToolRunner

SUPPORTED_CLIENTS = ("npm", "yarn", "pnpm")

LOCKFILES = {
    "npm": "package-lock.json",
    "yarn": "yarn.lock",
    "pnpm": "pnpm-lock.yaml",
}


class NodeRunner(ToolRunner):
    """Runs the configured npm-family client. ``client`` overrides the config."""

    tool = "node"

    def __init__(self, cwd=".", dry_run: bool = False, client: Optional[str] = None):
        super().__init__(cwd=cwd, dry_run=dry_run, executable=client)
        if self.executable not in SUPPORTED_CLIENTS:
            raise ValueError(f"Unsupported node client '{self.executable}', expected one of {SUPPORTED_CLIENTS}")
        self.client = self.executable

    def has_lockfile(self) -> bool:
        return self.path(LOCKFILES[self.client]).exists()

    def install(self, frozen: bool = False) -> Tuple[bool, str]:
        """Installs dependencies; with ``frozen`` the lockfile must be respected."""
        if not frozen:
            return self._run(self.command("install"))
        if self.client == "npm":
            args = ["ci"] if self.has_lockfile() else ["install"]
        else:
            args = ["install", "--frozen-lockfile"]
        return self._run(self.command(*args))

    def run_script(self, script: str, *extra) -> Tuple[bool, str]:
        args = ["run", script]
        if extra:
            args += ["--", *extra]
        return self._run(self.command(*args))

    def publish(self, tag: Optional[str] = None, access: Optional[str] = None) -> Tuple[bool, str]:
        if not self.path("package.json").exists():
            return False, "No package.json found"
        args = ["publish"]
        if tag:
            args += ["--tag", tag]
        if access:
            args += ["--access", access]
        return self._run(self.command(*args))

    def set_version(self, version: str) -> Tuple[bool, str]:
        """Sets the package.json version without creating a git tag."""
        if self.client == "yarn":
            args = ["version", "--new-version", version, "--no-git-tag-version"]
        else:
            args = ["version", version, "--no-git-tag-version"]
        return self._run(self.command(*args))

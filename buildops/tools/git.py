"""
git wrapper.
"""
from typing import Optional, Tuple

from .base import ToolRunner


class GitRunner(ToolRunner):
    tool = "git"

    def status(self) -> Optional[str]:
        """Porcelain status output; empty string for a clean tree."""
        return self._query(self.command("status", "--porcelain"))

    def is_clean(self) -> bool:
        return self.status() == ""

    def current_branch(self) -> Optional[str]:
        return self._query(self.command("rev-parse", "--abbrev-ref", "HEAD"))

    def remote_url(self, remote_name: str = "origin") -> Optional[str]:
        return self._query(self.command("config", "--get", f"remote.{remote_name}.url"))

    def latest_tag(self) -> Optional[str]:
        return self._query(self.command("describe", "--tags", "--abbrev=0"))

    def add(self, *paths) -> Tuple[bool, str]:
        return self._run(self.command("add", *(paths or ("-A",))))

    def commit(self, message: str, all_changes: bool = False) -> Tuple[bool, str]:
        args = ["commit", "-m", message]
        if all_changes:
            args.insert(1, "-a")
        return self._run(self.command(*args))

    def tag(self, name: str, message: Optional[str] = None, force: bool = False) -> Tuple[bool, str]:
        """Creates a tag; annotated when a message is given."""
        args = ["tag"]
        if force:
            args.append("-f")
        if message:
            args += ["-a", name, "-m", message]
        else:
            args.append(name)
        return self._run(self.command(*args))

    def push(self, remote: str = "origin", ref: Optional[str] = None, tags: bool = False) -> Tuple[bool, str]:
        args = ["push", remote]
        if ref:
            args.append(ref)
        if tags:
            args.append("--tags")
        return self._run(self.command(*args))

    def clone(self, url: str, destination: Optional[str] = None, depth: Optional[int] = None) -> Tuple[bool, str]:
        args = ["clone"]
        if depth:
            args += ["--depth", str(depth)]
        args.append(url)
        if destination:
            args.append(destination)
        return self._run(self.command(*args))

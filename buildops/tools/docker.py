"""
docker wrapper.
"""
from typing import Dict, Optional, Tuple

from .base import ToolRunner


class DockerRunner(ToolRunner):
    tool = "docker"

    def build(self, tag: str, context: str = ".", dockerfile: Optional[str] = None,
              build_args: Optional[Dict[str, str]] = None, platform: Optional[str] = None,
              no_cache: bool = False) -> Tuple[bool, str]:
        args = ["build", "-t", tag]
        if dockerfile:
            args += ["-f", dockerfile]
        for key, value in (build_args or {}).items():
            args += ["--build-arg", f"{key}={value}"]
        if platform:
            args += ["--platform", platform]
        if no_cache:
            args.append("--no-cache")
        args.append(context)
        return self._run(self.command(*args))

    def tag(self, source: str, target: str) -> Tuple[bool, str]:
        return self._run(self.command("tag", source, target))

    def push(self, image: str) -> Tuple[bool, str]:
        return self._run(self.command("push", image))

    def remove_image(self, image: str, force: bool = False) -> Tuple[bool, str]:
        args = ["rmi"]
        if force:
            args.append("-f")
        args.append(image)
        return self._run(self.command(*args))

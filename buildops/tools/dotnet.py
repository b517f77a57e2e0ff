"""
dotnet CLI wrapper.
"""
from typing import Optional, Tuple

from .base import ToolRunner


class DotnetRunner(ToolRunner):
    tool = "dotnet"

    def restore(self, project: Optional[str] = None) -> Tuple[bool, str]:
        return self._run(self.command("restore", project))

    def build(self, project: Optional[str] = None, configuration: str = "Release",
              no_restore: bool = False) -> Tuple[bool, str]:
        args = ["build", project, "-c", configuration]
        if no_restore:
            args.append("--no-restore")
        return self._run(self.command(*args))

    def test(self, project: Optional[str] = None, configuration: str = "Release",
             no_build: bool = False) -> Tuple[bool, str]:
        args = ["test", project, "-c", configuration]
        if no_build:
            args.append("--no-build")
        return self._run(self.command(*args))

    def pack(self, project: Optional[str] = None, configuration: str = "Release",
             output: Optional[str] = None, version: Optional[str] = None) -> Tuple[bool, str]:
        args = ["pack", project, "-c", configuration]
        if output:
            args += ["-o", output]
        if version:
            args.append(f"-p:Version={version}")
        return self._run(self.command(*args))

    def publish(self, project: Optional[str] = None, configuration: str = "Release",
                runtime: Optional[str] = None, output: Optional[str] = None,
                self_contained: Optional[bool] = None) -> Tuple[bool, str]:
        args = ["publish", project, "-c", configuration]
        if runtime:
            args += ["-r", runtime]
        if output:
            args += ["-o", output]
        if self_contained is not None:
            args += ["--self-contained", "true" if self_contained else "false"]
        return self._run(self.command(*args))

    def nuget_push(self, package: str, source: str, api_key: Optional[str] = None,
                   skip_duplicate: bool = True) -> Tuple[bool, str]:
        args = ["nuget", "push", package, "--source", source]
        if api_key:
            args += ["--api-key", api_key]
        if skip_duplicate:
            args.append("--skip-duplicate")
        return self._run(self.command(*args))

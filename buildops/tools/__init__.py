"""
Thin wrappers around external build tools.

Each runner builds an argument list, runs it through run_command in an
explicit working directory and reports (success, message).
"""
from .base import ToolRunner
from .docker import DockerRunner
from .dotnet import DotnetRunner
from .git import GitRunner
from .github import GitHubReleaser
from .node import NodeRunner

__all__ = [
    "ToolRunner",
    "DockerRunner",
    "DotnetRunner",
    "GitRunner",
    "GitHubReleaser",
    "NodeRunner",
]

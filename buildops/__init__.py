"""
buildops - build automation helpers.

Version/build-stamp mutation for arbitrary text files, project scaffolding
templates, and thin wrappers around git, docker, dotnet, npm and gh.
"""

__version__ = "0.1.0"

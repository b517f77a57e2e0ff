"""
Configuration and logging setup for buildops.

Configuration is read from ~/.buildopsrc (JSON) or ~/.buildopsrc.toml, or from
the file named by BUILDOPS_CONFIG, and merged over the defaults below.
Environment variables of the form BUILDOPS_<SECTION>_<KEY> override both.
"""
import copy
import json
import logging
import os
from pathlib import Path

import toml
from rich.console import Console
from rich.logging import RichHandler

# Initialize Rich Console
console = Console(stderr=True)

# Configure logging to use RichHandler
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(console=console, rich_tracebacks=True)]
)

logger = logging.getLogger("rich")

ENV_PREFIX = "BUILDOPS_"
CONFIG_FILENAMES = [".buildopsrc", ".buildopsrc.toml"]


def get_default_config():
    """Return a fresh copy of the default configuration."""
    return {
        "templates": {
            "directory": "~/.buildops/templates",
            "variables": {},
        },
        "versioning": {
            "pattern": None,
            "backup": False,
        },
        "stamp": {
            "pattern": None,
        },
        "tools": {
            "git": "git",
            "docker": "docker",
            "dotnet": "dotnet",
            "node": "npm",
            "gh": "gh",
        },
        "release": {
            "max_parallel_uploads": 4,
        },
        "logging": {
            "level": "INFO",
            "format": "%(message)s",
        },
    }


def get_config_path():
    """
    Returns the path of the active configuration file.

    BUILDOPS_CONFIG wins; otherwise the first existing file in the home
    directory, falling back to ~/.buildopsrc when none exists yet.
    """
    explicit = os.environ.get("BUILDOPS_CONFIG")
    if explicit:
        return Path(explicit).expanduser()

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        candidate = home / filename
        if candidate.exists():
            return candidate
    return home / CONFIG_FILENAMES[0]


def merge_configs(base, override):
    """
    Deep-merges two configuration dictionaries.

    Args:
        base (dict): The base configuration.
        override (dict): Values that take precedence over base.

    Returns:
        dict: A new merged dictionary. Neither input is modified.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _read_config_file(path):
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix == ".toml":
            return toml.load(f)
        return json.load(f)


def _coerce(value, reference):
    """Coerce an environment string to the type of the default value."""
    if isinstance(reference, bool):
        return value.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(reference, int):
        try:
            return int(value)
        except ValueError:
            logger.warning(f"Ignoring non-integer override value: {value}")
            return reference
    return value


def _apply_env_overrides(config, prefix=ENV_PREFIX):
    for key, value in config.items():
        env_key = f"{prefix}{key.upper()}"
        if isinstance(value, dict):
            _apply_env_overrides(value, prefix=f"{env_key}_")
        elif env_key in os.environ:
            config[key] = _coerce(os.environ[env_key], value)
    return config


def load_config():
    """
    Loads the configuration with all merges applied.

    Order of precedence (lowest first): defaults, config file, environment.
    A config file that cannot be parsed is logged and ignored.
    """
    config = get_default_config()

    path = get_config_path()
    if path.exists():
        try:
            config = merge_configs(config, _read_config_file(path) or {})
        except (OSError, ValueError, toml.TomlDecodeError) as e:
            logger.error(f"Could not read config file {path}: {e}")

    return _apply_env_overrides(config)


def save_config(config, path=None):
    """Writes the configuration as JSON (or TOML for a .toml path)."""
    path = Path(path) if path else Path.home() / CONFIG_FILENAMES[0]
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        if path.suffix == ".toml":
            toml.dump(config, f)
        else:
            json.dump(config, f, indent=2)
    return path


def generate_config_example():
    """Writes ~/.buildopsrc.example with the defaults and a few samples filled in."""
    example = get_default_config()
    example["templates"]["variables"] = {
        "AUTHOR": "Your Name",
        "REPO_URL": "https://github.com/you/project",
    }
    example["versioning"]["pattern"] = 'AssemblyVersion\\("([^"]+)"\\)'
    example["stamp"]["pattern"] = "BuildStamp = ([0-9]+)"

    path = save_config(example, Path.home() / ".buildopsrc.example")
    console.print(f"An example configuration file has been saved to {path}")
    return path


def configure_logging(config=None, verbose=False):
    """Applies the logging section of the configuration to the shared logger."""
    config = config or load_config()
    level_name = "DEBUG" if verbose else str(config.get("logging", {}).get("level", "INFO")).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

"""Data models for treeconf."""

from dataclasses import dataclass
from dataclasses import field
from enum import Enum


class Format(Enum):
    """Built-in configuration file formats.

    Values are the canonical format names accepted as format hints.
    """

    JSON = "json"
    YAML = "yaml"
    INI = "ini"


# Loaded relative to the base directory, in this order
DEFAULT_FILES: tuple[str, ...] = (
    "config/config.json",
    "config/config.yml",
    "config/config.ini",
)

# Command line flags are spelled --config:<name>
OPTION_PREFIX = "config"


@dataclass(frozen=True)
class CommandLineOptions:
    """Configuration loading options taken from the command line.

    Attributes:
        ignore_defaults: Skip the default configuration files
        files: Additional sources to load, in command line order
    """

    ignore_defaults: bool = False
    files: tuple[str, ...] = field(default_factory=tuple)

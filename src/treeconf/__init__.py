"""treeconf: Hierarchical configuration store with namespaced access.

This library loads settings from JSON, YAML and INI files (local or remote),
merges them into one nested tree and exposes '/'-separated key access
scoped to an active namespace:
- Files are merged in load order; later files overwrite conflicting settings
  while nested sections are merged key by key
- Keys resolve relative to the active namespace; a leading '/' resolves
  from the root of the tree
- set() only changes the in-memory tree, nothing is written back

Public API:
    ConfigStore: Main class for loading and accessing configuration
    Format: Enum of the built-in file formats
    CommandLineOptions: Loading options parsed from the command line
    deep_merge: Utility function for deep dictionary merging
    register_decoder: Add support for another file format
    ConfigError and subclasses: Exception types

Example:
    ```python
    from treeconf import ConfigStore

    # Loads config/config.{json,yml,ini} from the base directory
    config = ConfigStore("/srv/app")
    config.load("/etc/app/overrides.yml")

    config.set_namespace("database")
    host = config.get("host")
    debug = config.get("/debug", False)
    ```
"""

from .exceptions import ConfigError
from .exceptions import ConfigValidationError
from .exceptions import DecodeError
from .exceptions import InvalidNamespaceError
from .exceptions import KeyNotFoundError
from .exceptions import RootAccessDeniedError
from .exceptions import SourceUnreadableError
from .exceptions import UnknownFormatError
from .formats import register_decoder
from .models import CommandLineOptions
from .models import Format
from .store import ConfigStore
from .utils import deep_merge

__version__ = "0.1.0"

__all__ = [
    "ConfigStore",
    "Format",
    "CommandLineOptions",
    "deep_merge",
    "register_decoder",
    "ConfigError",
    "ConfigValidationError",
    "DecodeError",
    "InvalidNamespaceError",
    "KeyNotFoundError",
    "RootAccessDeniedError",
    "SourceUnreadableError",
    "UnknownFormatError",
]

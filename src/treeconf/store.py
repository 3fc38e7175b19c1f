"""Hierarchical configuration store with namespaced access."""

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigValidationError
from .exceptions import InvalidNamespaceError
from .exceptions import KeyNotFoundError
from .exceptions import SourceUnreadableError
from .formats import decode
from .formats import resolve_format
from .formats import strip_comments
from .models import DEFAULT_FILES
from .paths import SEPARATOR
from .paths import join_path
from .paths import resolve_key
from .sources import read_source
from .utils import assign
from .utils import contains
from .utils import deep_merge
from .utils import lookup

logger = logging.getLogger(__name__)

_MISSING = object()


class ConfigStore:
    """Merges configuration files into one tree and serves scoped access.

    Files are merged in load order: settings from a newly loaded file
    overwrite existing ones, while nested sections are merged key by key.
    Keys are '/'-separated paths resolved relative to the active namespace;
    a leading '/' resolves from the root of the tree instead.

    Unless ignore_defaults is set, the default files (config/config.json,
    config/config.yml, config/config.ini) are loaded from base_dir. Missing
    default files are skipped, malformed ones raise.

    Args:
        base_dir: Directory to look for the default configuration files
        ignore_defaults: Do not load the default configuration files
        permit_root: Allow root-escaped keys while a namespace is active

    Example:
        ```python
        config = ConfigStore("/srv/app", ignore_defaults=True)
        config.load("/srv/app/base.json").load("/srv/app/local.yml")
        config.set_namespace("database")
        host = config.get("host")
        debug = config.get("/debug", False)
        ```
    """

    def __init__(self, base_dir: str | Path = "./", ignore_defaults: bool = False, *, permit_root: bool = True):
        base_dir = str(base_dir)
        self.base_dir = base_dir if base_dir.endswith((SEPARATOR, os.sep)) else base_dir + SEPARATOR
        self.sources: list[str] = []
        self._permit_root = permit_root
        self._tree: dict[str, Any] = {}
        self._ns: list[str] = []

        if not ignore_defaults:
            self._load_default_files()

    @property
    def permit_root(self) -> bool:
        """Whether root-escaped keys may bypass an active namespace."""
        return self._permit_root

    # ===== Loading =====

    def load(self, source: str | Path, fmt: str = "") -> "ConfigStore":
        """Load a configuration source and merge it into the tree root.

        Loaded data is always merged at the root, regardless of the active
        namespace.

        Args:
            source: Local path or URL of the source
            fmt: Format name; guessed from the source extension if empty

        Returns:
            This store

        Raises:
            SourceUnreadableError: If the source cannot be read
            UnknownFormatError: If the format is unknown or cannot be guessed
            DecodeError: If the content is malformed
        """
        content = read_source(source)
        fmt = resolve_format(str(source), fmt)
        self.parse(content, fmt)
        self.sources.append(str(source))
        logger.info(f"Loaded configuration from {source} ({fmt})")
        return self

    def parse(self, content: str, fmt: str) -> "ConfigStore":
        """Decode configuration text and merge it into the tree root.

        Args:
            content: Configuration text
            fmt: Format name (json, yaml, yml, ini or a registered format)

        Returns:
            This store
        """
        self._merge(decode(content, fmt))
        return self

    def remove_comment(self, content: str) -> str:
        """Remove full-line '#' comments from content."""
        return strip_comments(content)

    # ===== Access =====

    def get(self, key: str = "", default: Any = _MISSING) -> Any:
        """Get a setting.

        Values are returned as independent copies.

        Args:
            key: '/'-separated key; empty for the active namespace itself
            default: Returned if the key does not exist

        Returns:
            The stored value or default

        Raises:
            KeyNotFoundError: If the key does not exist and no default is given
            RootAccessDeniedError: If root access is not permitted
        """
        path = self._resolve(key)
        try:
            value = lookup(self._tree, path)
        except KeyNotFoundError:
            if default is _MISSING:
                raise
            return default
        return copy.deepcopy(value)

    def exists(self, key: str = "") -> bool:
        """Check if a setting exists for key."""
        return contains(self._tree, self._resolve(key))

    def set(self, key: str, value: Any) -> "ConfigStore":
        """Set a setting in memory.

        The key is resolved against the active namespace. Mapping values
        are merged with existing settings at key.

        Returns:
            This store
        """
        self._tree = assign(self._tree, self._resolve(key), copy.deepcopy(value))
        return self

    # ===== Namespace =====

    def set_namespace(self, ns: str) -> "ConfigStore":
        """Set the active namespace.

        ns is resolved against the current namespace and stored in absolute
        form. An empty ns or '/' resets the namespace to the root.

        Returns:
            This store

        Raises:
            InvalidNamespaceError: If ns does not exist; the namespace is unchanged
        """
        if not ns or ns == SEPARATOR:
            self._ns = []
            return self

        path = self._resolve(ns)
        if not contains(self._tree, path):
            raise InvalidNamespaceError(f"Namespace '{ns}' not valid")

        self._ns = path
        logger.info(f"Namespace set to '{join_path(path)}'")
        return self

    def get_namespace(self) -> str:
        """Return the active namespace as a '/'-separated string."""
        return join_path(self._ns)

    def get_namespace_array(self) -> list[str]:
        """Return the active namespace segments."""
        return list(self._ns)

    # ===== Cloning =====

    def clone(self, key: str = "") -> "ConfigStore":
        """Create an independent store from a part of this one.

        Args:
            key: Key of the subtree to copy; empty copies the whole tree

        Returns:
            New store with defaults ignored and namespace at the root

        Raises:
            KeyNotFoundError: If key does not exist
            ConfigValidationError: If key addresses a scalar value
        """
        data = self.get(key) if key else copy.deepcopy(self._tree)
        if not isinstance(data, dict):
            raise ConfigValidationError(f"Cannot clone '{key}': value is not a mapping")

        clone = ConfigStore(self.base_dir, ignore_defaults=True, permit_root=self._permit_root)
        clone._merge(data)
        return clone

    # ===== Private Helpers =====

    def _resolve(self, key: str) -> list[str]:
        return resolve_key(key, self._ns, self._permit_root)

    def _merge(self, data: dict[str, Any]) -> None:
        self._tree = deep_merge(self._tree, copy.deepcopy(data))

    def _load_default_files(self) -> None:
        for name in DEFAULT_FILES:
            try:
                self.load(self.base_dir + name)
            except SourceUnreadableError as e:
                # Missing defaults are fine, malformed ones are not
                logger.debug(f"Skipping default configuration file: {e}")

    def __str__(self) -> str:
        return yaml.dump(self._tree, default_flow_style=False, sort_keys=False)

    def __repr__(self) -> str:
        return (
            f"ConfigStore(base_dir={self.base_dir!r}, namespace={self.get_namespace()!r}, sources={self.sources!r})"
        )

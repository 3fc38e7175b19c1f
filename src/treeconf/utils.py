"""Operations on nested configuration trees.

A tree is a plain ``dict`` whose values are either scalars (anything that
is not a dict, lists included) or further trees.
"""

from typing import Any

from .exceptions import ConfigValidationError
from .exceptions import KeyNotFoundError


def deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries with overlay precedence.

    Recursively merges nested dictionaries. Non-dict values in overlay
    completely replace corresponding values in base.

    Args:
        base: Base dictionary
        overlay: Overlay dictionary (takes precedence)

    Returns:
        New merged dictionary (base and overlay are not modified)

    Examples:
        >>> base = {"a": 1, "b": {"c": 2, "d": 3}}
        >>> overlay = {"b": {"c": 20}, "e": 5}
        >>> deep_merge(base, overlay)
        {'a': 1, 'b': {'c': 20, 'd': 3}, 'e': 5}

        >>> deep_merge({"a": {"b": 1}}, {"a": "flat"})
        {'a': 'flat'}
    """
    result = base.copy()

    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def lookup(tree: dict[str, Any], path: list[str]) -> Any:
    """Return the value stored at path.

    An empty path addresses the tree itself.

    Raises:
        KeyNotFoundError: If any step of the walk is missing or passes
            through a scalar
    """
    value: Any = tree
    for segment in path:
        if not isinstance(value, dict) or segment not in value:
            raise KeyNotFoundError(path)
        value = value[segment]
    return value


def contains(tree: dict[str, Any], path: list[str]) -> bool:
    """Check whether a value is stored at path."""
    try:
        lookup(tree, path)
    except KeyNotFoundError:
        return False
    return True


def assign(tree: dict[str, Any], path: list[str], value: Any) -> dict[str, Any]:
    """Set value at path by merging a single-branch tree into tree.

    Intermediate levels are created as needed and siblings along the path
    are preserved. A scalar found on the path is replaced by a mapping.

    Returns:
        New merged tree (tree is not modified)

    Raises:
        ConfigValidationError: If path is empty and value is not a mapping

    Examples:
        >>> assign({"db": {"host": "x", "port": 1}}, ["db", "port"], 2)
        {'db': {'host': 'x', 'port': 2}}
    """
    branch = value
    for segment in reversed(path):
        branch = {segment: branch}

    if not isinstance(branch, dict):
        raise ConfigValidationError(f"Cannot replace the configuration root with {type(value).__name__}")

    return deep_merge(tree, branch)


def normalize_keys(data: Any) -> Any:
    """Convert all mapping keys to strings, recursing into mappings and lists."""
    if isinstance(data, dict):
        return {str(key): normalize_keys(value) for key, value in data.items()}
    if isinstance(data, list):
        return [normalize_keys(item) for item in data]
    return data

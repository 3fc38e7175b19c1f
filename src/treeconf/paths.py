"""Key path resolution against the active namespace."""

from .exceptions import RootAccessDeniedError

SEPARATOR = "/"


def split_key(key: str) -> list[str]:
    """Split a key string into path segments.

    Consecutive separators are not collapsed; they produce empty segments.

    Examples:
        >>> split_key("group1/prop1")
        ['group1', 'prop1']
        >>> split_key("a//b")
        ['a', '', 'b']
    """
    return key.split(SEPARATOR)


def join_path(path: list[str]) -> str:
    """Join path segments back into a key string."""
    return SEPARATOR.join(path)


def resolve_key(key: str, namespace: list[str], permit_root: bool = True) -> list[str]:
    """Resolve a key string to an absolute path in the tree.

    A key with a leading separator is resolved from the tree root and the
    namespace is ignored. Any other key is appended to the namespace.

    Args:
        key: Key string, segments separated by '/'
        namespace: Active namespace segments
        permit_root: Whether root-escaped keys may bypass a non-empty namespace

    Returns:
        New list of path segments

    Raises:
        RootAccessDeniedError: If the key escapes to the root while a
            namespace is active and root access is not permitted

    Examples:
        >>> resolve_key("prop1", ["group1"])
        ['group1', 'prop1']
        >>> resolve_key("/other/prop1", ["group1"])
        ['other', 'prop1']
        >>> resolve_key("", ["group1"])
        ['group1']
    """
    if not key:
        return list(namespace)

    segments = split_key(key)

    if key.startswith(SEPARATOR):
        if not permit_root and namespace:
            raise RootAccessDeniedError(f"Root access not permitted: '{key}'")
        return segments[1:]

    return list(namespace) + segments

"""Exceptions for treeconf."""


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class SourceUnreadableError(ConfigError):
    """A configuration source could not be opened or read."""

    pass


class UnknownFormatError(ConfigError, ValueError):
    """The format of a source could not be determined or is not supported."""

    pass


class DecodeError(ConfigError):
    """Content could not be parsed as the claimed format."""

    pass


class KeyNotFoundError(ConfigError, LookupError):
    """A key path does not exist in the configuration tree.

    Attributes:
        path: Full list of segments that was looked up
    """

    def __init__(self, path: list[str]):
        self.path = list(path)
        super().__init__(f"Setting with the key '{'/'.join(self.path)}' does not exist")


class InvalidNamespaceError(ConfigError, ValueError):
    """Namespace target does not exist in the configuration tree."""

    pass


class RootAccessDeniedError(ConfigError):
    """Root-escaped key used while root access is not permitted."""

    pass


class ConfigValidationError(ConfigError):
    """Configuration data has the wrong shape for the requested operation."""

    pass

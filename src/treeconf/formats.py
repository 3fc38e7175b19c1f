"""Format detection and decoding of configuration text."""

import configparser
import json
import logging
import re
from collections.abc import Callable
from typing import Any

import yaml

from .exceptions import DecodeError
from .exceptions import UnknownFormatError
from .models import Format
from .utils import normalize_keys

logger = logging.getLogger(__name__)

Decoder = Callable[[str], Any]

# Whole lines whose first non-blank character is '#'
_COMMENT_LINE = re.compile(r"^[ \t]*#.*(?:\n|$)", re.MULTILINE)

# Synthetic section that collects INI keys appearing before any [section]
_INI_ROOT_SECTION = "\x00root"
_INI_DEFAULT_SECTION = "\x00default"


def strip_comments(content: str) -> str:
    """Remove full-line '#' comments.

    A line is removed when its first non-whitespace character is '#'.
    A '#' later in a line is kept.

    Examples:
        >>> strip_comments('# header\\n{"a": "#1"}\\n  # trailing')
        '{"a": "#1"}\\n'
    """
    return _COMMENT_LINE.sub("", content)


def decode_json(content: str) -> Any:
    """Decode JSON text, allowing full-line '#' comments."""
    try:
        return json.loads(strip_comments(content))
    except json.JSONDecodeError as e:
        raise DecodeError(f"Error parsing JSON: {e}") from e


def decode_yaml(content: str) -> Any:
    """Decode YAML text."""
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise DecodeError(f"Error parsing YAML: {e}") from e


def decode_ini(content: str) -> dict[str, Any]:
    """Decode INI text into a mapping.

    Sections become nested mappings. Keys before the first section header
    are placed at the top level. All values are strings.
    """
    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        inline_comment_prefixes=(";",),
        default_section=_INI_DEFAULT_SECTION,
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]

    try:
        parser.read_string(f"[{_INI_ROOT_SECTION}]\n{content}")
    except configparser.Error as e:
        raise DecodeError(f"Error parsing INI: {e}") from e

    data: dict[str, Any] = {}
    for section in parser.sections():
        values = {key: _unquote(value) for key, value in parser.items(section, raw=True)}
        if section == _INI_ROOT_SECTION:
            data.update(values)
        else:
            data[section] = values
    return data


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


_decoders: dict[str, Decoder] = {
    Format.JSON.value: decode_json,
    Format.YAML.value: decode_yaml,
    Format.INI.value: decode_ini,
}

# Format names and file extensions that map onto a registered decoder
_aliases: dict[str, str] = {
    "json": Format.JSON.value,
    "yaml": Format.YAML.value,
    "yml": Format.YAML.value,
    "ini": Format.INI.value,
}


def register_decoder(name: str, decoder: Decoder, extensions: tuple[str, ...] = ()) -> None:
    """Register a decoder for a format.

    Args:
        name: Format name, usable as a format hint
        decoder: Callable turning text into a mapping; raises DecodeError on failure
        extensions: File extensions (without dot) that guess_format maps to name
    """
    name = name.lower()
    _decoders[name] = decoder
    _aliases[name] = name
    for extension in extensions:
        _aliases[extension.lower()] = name
    logger.debug(f"Registered decoder for '{name}' (extensions: {', '.join(extensions) or 'none'})")


def guess_format(source: str) -> str | None:
    """Guess the format from the extension of a path or URL.

    The extension may be followed by a query ('?...') or fragment ('#...').
    Matching is case-insensitive.

    Returns:
        Canonical format name, or None if no known extension matches

    Examples:
        >>> guess_format("config/config.YML")
        'yaml'
        >>> guess_format("http://localhost/app.json?rev=2")
        'json'
        >>> guess_format("notes.txt") is None
        True
    """
    extensions = "|".join(re.escape(ext) for ext in sorted(_aliases, key=len, reverse=True))
    match = re.search(rf"\.({extensions})(?:$|\?|#)", source, re.IGNORECASE)
    if not match:
        return None
    return _aliases[match.group(1).lower()]


def resolve_format(source: str, hint: str = "") -> str:
    """Resolve the format of a source.

    An explicit hint takes precedence; the extension is only used without one.

    Raises:
        UnknownFormatError: If the hint is unknown or no extension matches
    """
    if hint:
        name = _aliases.get(hint.lower())
        if name is None:
            raise UnknownFormatError(f"Unsupported configuration format '{hint}'")
        return name

    name = guess_format(source)
    if name is None:
        raise UnknownFormatError(f"Cannot guess the file format of '{source}'")
    logger.debug(f"Guessed format '{name}' for {source}")
    return name


def decode(content: str, fmt: str) -> dict[str, Any]:
    """Decode text in the given format into a mapping.

    Empty documents decode to an empty mapping. Keys are converted to strings.

    Raises:
        UnknownFormatError: If fmt is not a registered format
        DecodeError: If the content is malformed or its top level is not a mapping
    """
    name = _aliases.get(fmt.lower())
    if name is None:
        raise UnknownFormatError(f"Unsupported configuration format '{fmt}'")

    data = _decoders[name](content)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a mapping at the top level of {name} content, got {type(data).__name__}")
    return normalize_keys(data)

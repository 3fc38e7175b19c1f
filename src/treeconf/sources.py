"""Reading configuration text from local paths and URLs."""

import logging
import urllib.error
import urllib.request
from pathlib import Path
from urllib.parse import urlparse

import requests

from .exceptions import SourceUnreadableError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30

_HTTP_SCHEMES = {"http", "https"}
_URL_SCHEMES = {"ftp", "file"}


def read_source(source: str | Path, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Read the text content of a configuration source.

    HTTP(S) URLs are fetched with requests, ftp:// and file:// URLs with
    urllib. Everything else is read as a local file.

    Args:
        source: Local path or URL
        timeout: Timeout in seconds for remote sources

    Returns:
        Text content of the source

    Raises:
        SourceUnreadableError: If the source cannot be opened or read
    """
    if isinstance(source, Path):
        return _read_file(source)

    scheme = urlparse(source).scheme.lower()
    if scheme in _HTTP_SCHEMES:
        return _read_http(source, timeout)
    if scheme in _URL_SCHEMES:
        return _read_url(source, timeout)
    return _read_file(Path(source))


def _read_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnreadableError(f"'{path}' is not readable: {e}") from e


def _read_http(url: str, timeout: float) -> str:
    logger.debug(f"Fetching configuration from {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise SourceUnreadableError(f"Failed reading '{url}': {e}") from e
    return response.text


def _read_url(url: str, timeout: float) -> str:
    logger.debug(f"Fetching configuration from {url}")
    try:
        with urllib.request.urlopen(url, timeout=timeout) as resp:
            return resp.read().decode("utf-8")
    except (urllib.error.URLError, OSError, UnicodeDecodeError) as e:
        raise SourceUnreadableError(f"Failed reading '{url}': {e}") from e

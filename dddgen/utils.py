"""Utility functions for loading input documents.

This module provides functions for reading JSON/YAML documents from
local files and for downloading remote documents with proper error
handling.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests
import yaml

from .codegen.core.errors import NetworkError, ParseError
from .logging_config import get_logger

logger = get_logger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def is_url(value: str | Path) -> bool:
    """Return True when the value looks like an http(s) URL."""
    parsed = urlparse(str(value))
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def load_document(file_path: str | Path) -> Any:
    """Load a JSON or YAML document from a local file.

    The parser is picked from the file suffix: ``.yaml``/``.yml`` use
    PyYAML, everything else is read as JSON.

    Args:
        file_path: Path to the document.

    Returns:
        Parsed document.

    Raises:
        ParseError: If the file cannot be read or does not parse.
    """
    file_path = Path(file_path)
    logger.debug("Loading document: %s", file_path)

    try:
        with file_path.open("r", encoding="utf-8") as f:
            if file_path.suffix.lower() in YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except json.JSONDecodeError as e:
        raise ParseError(f"invalid JSON in {file_path}", e) from e
    except yaml.YAMLError as e:
        raise ParseError(f"invalid YAML in {file_path}", e) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"cannot read {file_path}", e) from e

    logger.debug("Loaded document: %s", file_path)
    return data


def fetch_document(url: str, destination: str | Path, timeout: int = 30) -> Path:
    """Download a remote document into a directory.

    The file keeps the last path segment of the URL so that format
    detection by extension still works.

    Args:
        url: http(s) URL of the document.
        destination: Directory to write into.
        timeout: Request timeout in seconds.

    Returns:
        Path of the downloaded file.

    Raises:
        NetworkError: If the URL is invalid or the request fails.
    """
    if not is_url(url):
        raise NetworkError(f"invalid URL: {url}")

    name = Path(urlparse(url).path).name
    if not name:
        raise NetworkError(f"URL does not name a file: {url}")

    logger.info("Downloading %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        raise NetworkError(f"request timeout for URL: {url}", e) from e
    except requests.exceptions.ConnectionError as e:
        raise NetworkError(f"connection error for URL: {url}", e) from e
    except requests.exceptions.HTTPError as e:
        raise NetworkError(
            f"HTTP error {e.response.status_code} for URL: {url}", e
        ) from e
    except requests.exceptions.RequestException as e:
        raise NetworkError(f"request error for URL: {url}", e) from e

    target = Path(destination) / name
    target.write_bytes(response.content)
    logger.debug("Saved %s to %s", url, target)
    return target

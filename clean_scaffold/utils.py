"""Utility functions for loading sample payloads and feature descriptions.

Payloads are kept as text: the text is embedded verbatim in generated
doc comments, and parsing happens later during inference.
"""

import json
import sys
from pathlib import Path
from typing import IO, Any
from urllib.parse import urlparse

import requests

from .feature.models import FeatureSpec
from .logging_config import get_logger

logger = get_logger(__name__)


class JSONLoaderError(Exception):
    """Custom exception for JSON loading errors."""

    pass


def load_text_from_file(file_path: str | Path) -> tuple[str, str]:
    """Load payload text from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, file text).

    Raises:
        FileNotFoundError: If file doesn't exist.
        JSONLoaderError: If file cannot be read.
    """
    file_path = Path(file_path)
    logger.debug("Attempting to load text from file: %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        # Might still be valid JSON
        logger.warning("File does not have .json extension: %s", file_path)

    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise JSONLoaderError(f"Error reading file {file_path}: {e}") from e

    logger.info("Loaded %d characters from %s", len(text), file_path)
    return str(file_path), text


def load_text_from_url(url: str, timeout: int = 30) -> tuple[str, str]:
    """Load payload text from a URL.

    Args:
        url: URL to fetch JSON from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, response text).

    Raises:
        JSONLoaderError: If URL is invalid or the request fails.
    """
    logger.debug("Attempting to load text from URL: %s", url)

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error("Invalid URL format: %s", url)
        raise JSONLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise JSONLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error for URL %s: %s", url, e)
        raise JSONLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        logger.error("HTTP error %s for URL: %s", status, url)
        raise JSONLoaderError(f"HTTP error {status} for URL: {url}") from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e)
        raise JSONLoaderError(f"Request error for URL {url}: {e}") from e

    content_type = response.headers.get("content-type", "").lower()
    if "application/json" not in content_type and not url.endswith(".json"):
        logger.warning("URL %s does not have JSON content type: %s", url, content_type)

    logger.info("Loaded %d characters from %s", len(response.text), url)
    return url, response.text


def load_text_from_stream(stream: IO[str] | None = None) -> tuple[str, str]:
    """Read payload text from a stream, stdin by default."""
    stream = stream or sys.stdin
    text = stream.read()
    logger.info("Loaded %d characters from stdin", len(text))
    return "stdin", text


def load_text(
    file_path: str | Path | None = None,
    url: str | None = None,
    stdin: bool = False,
    timeout: int = 30,
) -> tuple[str, str]:
    """Load payload text from exactly one of a file, a URL or stdin.

    Args:
        file_path: Path to local JSON file.
        url: URL to fetch JSON from.
        stdin: Read from standard input.
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, text).

    Raises:
        JSONLoaderError: If not exactly one source is given, or loading fails.
        FileNotFoundError: If file doesn't exist.
    """
    chosen = [bool(file_path), bool(url), bool(stdin)]
    if not any(chosen):
        logger.error("No input source provided")
        raise JSONLoaderError("One of file_path, url or stdin must be provided")

    if sum(chosen) > 1:
        logger.error("More than one input source provided")
        raise JSONLoaderError("Specify only one of file_path, url or stdin")

    if file_path:
        return load_text_from_file(file_path)
    if url:
        return load_text_from_url(url, timeout)
    return load_text_from_stream()


def load_json(
    file_path: str | Path | None = None,
    url: str | None = None,
    stdin: bool = False,
    timeout: int = 30,
) -> tuple[str, Any]:
    """Load and parse JSON data from a file, URL or stdin.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        JSONLoaderError: If loading fails or the text isn't valid JSON.
    """
    source, text = load_text(file_path, url, stdin, timeout)
    try:
        return source, json.loads(text)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", source, e)
        raise JSONLoaderError(f"Invalid JSON in {source}: {e}") from e
    except RecursionError as e:
        logger.error("JSON in %s nests too deeply", source)
        raise JSONLoaderError(f"Invalid JSON in {source}: nesting too deep") from e


def load_feature_spec(
    file_path: str | Path | None = None,
    url: str | None = None,
    stdin: bool = False,
    timeout: int = 30,
) -> tuple[str, FeatureSpec]:
    """Load a feature description document.

    Returns:
        Tuple of (source description, validated FeatureSpec).

    Raises:
        JSONLoaderError: If the document cannot be loaded or parsed.
        FeatureSpecError: If the description is invalid.
    """
    source, data = load_json(file_path, url, stdin, timeout)
    feature = FeatureSpec.from_dict(data)
    logger.info(
        "Loaded feature %s with %d endpoints from %s",
        feature.name,
        len(feature.endpoints),
        source,
    )
    return source, feature

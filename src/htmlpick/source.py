"""
Source module for htmlpick.

Resolves a location string to a readable byte stream: standard input when
empty, an HTTP(S) response body when it starts with "http", otherwise a
local file.
"""

import io
import logging
import sys
from contextlib import contextmanager
from time import monotonic
from typing import BinaryIO, Iterator, List, Optional

import requests

from .exceptions import ConfigurationError, FileAccessError, NetworkError

logger = logging.getLogger(__name__)

HTTP_PREFIX = "http"
CHUNK_SIZE = 1024


def is_http(location: str) -> bool:
    """Check whether a location denotes a network resource."""
    return location.startswith(HTTP_PREFIX)


def request_timeout(timeout: float) -> Optional[float]:
    """
    Map a configured timeout to requests' form; 0 leaves the transport default.

    Raises:
        ConfigurationError: If the timeout is negative
    """
    if timeout < 0:
        raise ConfigurationError(f"timeout must be positive values, got {timeout}")
    return timeout if timeout > 0 else None


@contextmanager
def open_source(location: str, timeout: float = 0) -> Iterator[BinaryIO]:
    """
    Open the input named by a location.

    The stream is released when the context exits, whatever the outcome.
    Standard input is never closed.

    Args:
        location: Empty for stdin, an http(s) URL, or a file path
        timeout: Overall deadline in seconds for network locations, 0 for none

    Yields:
        Readable binary stream

    Raises:
        FileAccessError: If the file cannot be opened or read
        NetworkError: If the HTTP request fails or runs past the deadline
    """
    if not location:
        logger.debug("Reading from standard input")
        yield sys.stdin.buffer
    elif not is_http(location):
        with open_file(location) as stream:
            yield stream
    else:
        with open_http(location, timeout) as stream:
            yield stream


@contextmanager
def open_file(path: str) -> Iterator[BinaryIO]:
    """Read a local file into a binary stream."""
    try:
        with open(path, "rb") as f:
            body = f.read()
    except OSError as e:
        raise FileAccessError(f"cannot read {path}: {e}") from e

    logger.debug(f"Read file: {path} ({len(body)} bytes)")
    with io.BytesIO(body) as stream:
        yield stream


@contextmanager
def open_http(url: str, timeout: float = 0) -> Iterator[BinaryIO]:
    """
    Fetch a URL with a GET request.

    The timeout bounds the whole request, body included. Status codes are
    not checked; any response body is handed to the parser.
    """
    deadline = monotonic() + timeout if request_timeout(timeout) else None

    logger.info(f"Fetching {url}")
    try:
        response = requests.get(url, stream=True, timeout=request_timeout(timeout))
    except requests.RequestException as e:
        raise NetworkError(f"failed to fetch {url}: {e}") from e

    try:
        body = read_body(response, url, deadline)
        logger.debug(f"Fetched {url}: status {response.status_code}, {len(body)} bytes")
        with io.BytesIO(body) as stream:
            yield stream
    finally:
        response.close()


def read_body(response: requests.Response, url: str, deadline: Optional[float]) -> bytes:
    """
    Read a streamed response body, checking the deadline after every chunk.

    Raises:
        NetworkError: If reading fails or the deadline passes
    """
    chunks: List[bytes] = []
    try:
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            check_deadline(url, deadline)
            chunks.append(chunk)
    except requests.RequestException as e:
        raise NetworkError(f"failed to fetch {url}: {e}") from e
    check_deadline(url, deadline)
    return b"".join(chunks)


def check_deadline(url: str, deadline: Optional[float]) -> None:
    """Raise NetworkError once the request deadline has passed."""
    if deadline is not None and monotonic() > deadline:
        raise NetworkError(f"failed to fetch {url}: deadline exceeded")

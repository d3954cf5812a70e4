# Author: PB and Claude
# Date: 2026-10-19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# src/ipfs_http_api/http_api.py

"""
HTTP transport for the IPFS (kubo) API.

One Transport executes exactly one request per call: it builds the URL and
body, runs the request over a short-lived connection handle, and classifies
the response into raw bytes or a typed error.

API Reference: https://docs.ipfs.tech/reference/kubo/rpc/

Debug logging:
    Enable with: IPFS_API_DEBUG=1 or by setting log level to DEBUG
    Example: IPFS_API_DEBUG=1 ipfs-http-api version
"""

import json
import logging
import os
from contextlib import ExitStack, contextmanager
from typing import Any, Optional
from urllib.parse import urlencode

import requests
from requests_toolbelt import MultipartEncoder

from ipfs_http_api.errors import (
    FileNotFound,
    HttpError,
    InvalidUsage,
    NoResponse,
    RemoteError,
)
from ipfs_http_api.types import DEFAULT_TIMEOUT, BodyMode, FilePath, InlineBytes

# Fixed boundary for inline bodies; payloads containing it are rejected.
BOUNDARY = "a831rwxi1a3gzaorw1w2z49dlsor"
OCTET_STREAM = "application/octet-stream"

# Configure logger for this module
logger = logging.getLogger(__name__)

# Enable debug logging via environment variable
if os.environ.get("IPFS_API_DEBUG"):
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    logger.setLevel(logging.DEBUG)


def encode_inline(content: bytes) -> tuple[bytes, dict]:
    """
    Wrap in-memory content as a single unnamed multipart file part.

    Returns:
        (body, headers) ready to hand to requests

    Raises:
        InvalidUsage: If the content contains the boundary token
    """
    marker = BOUNDARY.encode("ascii")
    if marker in content:
        raise InvalidUsage(
            f"Inline content contains the multipart boundary {BOUNDARY!r}; "
            "upload it from a file path instead"
        )

    body = b"".join([
        b"--", marker, b"\r\n",
        b"Content-Type: ", OCTET_STREAM.encode("ascii"), b"\r\n",
        b"Content-Disposition: file; \r\n",
        b"\r\n",
        content,
        b"\r\n--", marker, b"--\r\n",
    ])
    headers = {"Content-Type": f"multipart/form-data; boundary={BOUNDARY}"}
    return body, headers


def encode_file(fh, filename: str) -> MultipartEncoder:
    """Wrap an open file as one streamed part named 'file'.

    MultipartEncoder reads from the handle as the request body is sent,
    so large files are never held in memory.
    """
    return MultipartEncoder(fields={"file": (filename, fh, OCTET_STREAM)})


def build_url(url: str, params=None) -> str:
    """Append params as a query string, keeping the caller's order.

    Booleans become 'true'/'false' and None values are dropped.
    """
    if not params:
        return url

    items = params.items() if hasattr(params, "items") else params
    query = []
    for key, value in items:
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        query.append((key, value))

    if not query:
        return url

    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{urlencode(query)}"


def decode_envelope(body: bytes) -> Optional[Any]:
    """Decode a response body as JSON. Empty or non-JSON bodies give None."""
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return None


def classify(status_code: int, body: bytes, url: str = None) -> bytes:
    """
    Turn an HTTP outcome into the raw body or a typed error.

    A 4xx/5xx body that is not JSON raises HttpError. A JSON object carrying
    both Code and Message raises RemoteError with the daemon's code. Any other
    decodable error body is returned like a success.
    """
    if 400 <= status_code < 600:
        try:
            envelope = json.loads(body)
        except ValueError:
            raise HttpError(
                status_code, body.decode("utf-8", errors="replace"), url
            ) from None

        if isinstance(envelope, dict) and "Code" in envelope and "Message" in envelope:
            raise RemoteError(
                envelope["Code"], envelope["Message"], status_code=status_code, url=url
            )

        logger.debug(f"Passing through {status_code} body without Code/Message")

    return body


class Transport:
    """
    Executes one request per call over a short-lived connection handle.

    The handle (a requests.Session) is created on demand, reset before the
    request and closed afterwards on every path. A Transport is not safe for
    concurrent use: give each thread its own client, or serialize calls.
    """

    def __init__(self, timeout: int = DEFAULT_TIMEOUT):
        self.timeout = timeout
        self._session: Optional[requests.Session] = None
        self._session_timeout: Optional[int] = None

    @property
    def connected(self) -> bool:
        """True while a request holds the connection handle."""
        return self._session is not None

    @contextmanager
    def connection(self):
        """Acquire the handle for one request; yields (session, timeout)."""
        if self._session is None:
            self._session = requests.Session()
            # timeout is read when the handle is created
            self._session_timeout = self.timeout
        session = self._session
        self._reset(session)
        try:
            yield session, self._session_timeout
        finally:
            session.close()
            self._session = None
            self._session_timeout = None

    @staticmethod
    def _reset(session: requests.Session) -> None:
        """Drop any per-request state left on the handle."""
        session.headers = requests.utils.default_headers()
        session.params = {}

    def execute(
        self,
        url: str,
        body: BodyMode = None,
        params=None,
        method: str = None,
    ) -> bytes:
        """
        Run one HTTP request and return the raw response body.

        Args:
            url: Fully-formed endpoint URL, without query string
            body: None, InlineBytes or FilePath
            params: Ordered mapping of query parameters
            method: Override the verb (default: POST with a body, else GET)

        Returns:
            Raw response body bytes

        Raises:
            InvalidUsage: If body is not a known body mode, the file cannot be
                read, or the URL is malformed
            FileNotFound: If a FilePath body does not exist
            NoResponse: If no response was obtained (including timeout)
            HttpError: On a 4xx/5xx status with a non-JSON body
            RemoteError: On a 4xx/5xx status with a Code/Message envelope
        """
        if body is not None and not isinstance(body, (InlineBytes, FilePath)):
            raise InvalidUsage(
                f"Unsupported body {type(body).__name__}; use InlineBytes or FilePath"
            )
        if isinstance(body, FilePath):
            if not body.path.exists():
                raise FileNotFound(body.path, url)
            if body.path.is_dir():
                raise InvalidUsage(f"Path {body.path} is a directory, not a file")

        full_url = build_url(url, params)
        if method is None:
            method = "GET" if body is None else "POST"

        with ExitStack() as stack:
            kwargs = {}
            if isinstance(body, InlineBytes):
                data, headers = encode_inline(body.content)
                kwargs = {"data": data, "headers": headers}
                logger.debug(f"Request body: {len(body)} inline bytes")
            elif isinstance(body, FilePath):
                try:
                    fh = stack.enter_context(open(body.path, "rb"))
                except FileNotFoundError as e:
                    raise FileNotFound(body.path, url) from e
                except OSError as e:
                    raise InvalidUsage(f"Cannot read {body.path}: {e}", url) from e
                encoder = encode_file(fh, body.name)
                kwargs = {"data": encoder, "headers": {"Content-Type": encoder.content_type}}
                logger.debug(f"Request file: {body.path} ({encoder.len} bytes encoded)")

            session, timeout = stack.enter_context(self.connection())

            logger.debug(f"Request: {method} {full_url} (timeout {timeout}s)")
            try:
                response = session.request(method, full_url, timeout=timeout, **kwargs)
            except requests.exceptions.Timeout as e:
                raise NoResponse(
                    f"IPFS Error: No Response (timed out after {timeout}s)", full_url
                ) from e
            except (
                requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema,
                requests.exceptions.InvalidURL,
            ) as e:
                raise InvalidUsage(f"IPFS Error: Invalid URL {full_url!r}: {e}", full_url) from e
            except requests.exceptions.RequestException as e:
                raise NoResponse(f"IPFS Error: No Response ({e})", full_url) from e

            content = response.content or b""

        logger.debug(f"Response status: {response.status_code}")
        logger.debug(f"Response headers: {dict(response.headers)}")
        # Truncate body for logging (first 2000 chars)
        body_preview = content[:2000].decode("utf-8", errors="replace") if content else "(empty)"
        logger.debug(f"Response body: {body_preview}")

        return classify(response.status_code, content, full_url)

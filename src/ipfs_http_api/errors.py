# Author: PB and Claude
# Date: 2026-10-19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# src/ipfs_http_api/errors.py

"""
Exceptions raised by the IPFS HTTP API client.

Two families:
    - programmer errors (InvalidUsage, FileNotFound): the call site is wrong,
      retrying cannot help
    - transport errors (NoResponse, HttpError, RemoteError): raised after the
      request was attempted; NoResponse may be transient
"""

SNIPPET_LENGTH = 200


class IPFSError(Exception):
    """Base exception for the IPFS HTTP API client."""

    transient = False

    def __init__(self, message: str, url: str = None):
        super().__init__(message)
        self.url = url


class InvalidUsage(IPFSError, ValueError):
    """Raised when the caller supplies an impossible combination of arguments."""
    pass


class FileNotFound(IPFSError, FileNotFoundError):
    """Raised when a path-based upload names a file that does not exist."""

    def __init__(self, path, url: str = None):
        super().__init__(f"IPFS Error: File not found: {path}", url)
        self.path = path


class TransportError(IPFSError):
    """Raised when the request was attempted but did not succeed."""
    pass


class NoResponse(TransportError):
    """Raised when no response was obtained, including timeouts."""

    transient = True

    def __init__(self, message: str = "IPFS Error: No Response", url: str = None):
        super().__init__(message, url)


class HttpError(TransportError):
    """Raised on a 4xx/5xx status whose body is not valid JSON."""

    def __init__(self, status_code: int, body: str, url: str = None):
        self.status_code = status_code
        self.snippet = (body or "")[:SNIPPET_LENGTH]
        super().__init__(f"IPFS Error: HTTP {status_code}: {self.snippet}", url)


class RemoteError(TransportError):
    """Raised when the daemon answers with a {"Code": ..., "Message": ...} envelope."""

    def __init__(self, code, message: str, status_code: int = None, url: str = None):
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(f"IPFS Error: {message} (code {code})", url)

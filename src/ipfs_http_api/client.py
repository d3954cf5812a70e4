# Author: PB and Claude
# Date: 2026-10-19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# src/ipfs_http_api/client.py

"""
IPFS Client

One method per API endpoint. Each builds the endpoint URL, runs it through
the Transport and pulls a single field out of the decoded JSON envelope.
"""

import logging
from pathlib import Path
from typing import Optional

from ipfs_http_api.errors import InvalidUsage
from ipfs_http_api.http_api import Transport, decode_envelope
from ipfs_http_api.types import (
    API_METHODS,
    DEFAULT_API_PORT,
    DEFAULT_GATEWAY_PORT,
    DEFAULT_HOST,
    DEFAULT_API_METHOD,
    DEFAULT_TIMEOUT,
    Endpoint,
    body_mode,
)

logger = logging.getLogger(__name__)


def _extract(envelope, *keys):
    """Walk keys/indexes into an envelope; None if anything along the way is missing."""
    value = envelope
    for key in keys:
        if value is None:
            return None
        try:
            value = value[key]
        except (KeyError, IndexError, TypeError):
            return None
    return value


class IPFSClient:
    """HTTP client for one IPFS node (gateway + API ports)."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_GATEWAY_PORT,
        api_port: int = DEFAULT_API_PORT,
        timeout: int = DEFAULT_TIMEOUT,
        api_method: str = DEFAULT_API_METHOD,
    ):
        """
        Initialize IPFS client.

        Args:
            host: Hostname or IP of IPFS node
            port: Gateway port for content retrieval (default 8080)
            api_port: IPFS API port (default 5001)
            timeout: Request timeout in whole seconds (default 5)
            api_method: Verb for control-plane calls without a body (default GET;
                        kubo 0.5 and later only accept POST)
        """
        self._endpoint = Endpoint(host=host, gateway_port=port, api_port=api_port)
        self._transport = Transport()
        self.timeout = timeout
        if api_method not in API_METHODS:
            raise InvalidUsage(f"api_method must be one of {API_METHODS}, got {api_method!r}")
        self.api_method = api_method

    @property
    def endpoint(self) -> Endpoint:
        return self._endpoint

    @property
    def ipfs_url(self) -> str:
        return self._endpoint.ipfs_url

    @property
    def api_url(self) -> str:
        return self._endpoint.api_url

    @property
    def timeout(self) -> int:
        """Request timeout in seconds, read fresh at the start of each call."""
        return self._transport.timeout

    @timeout.setter
    def timeout(self, seconds: int) -> None:
        if isinstance(seconds, bool) or not isinstance(seconds, int) or seconds <= 0:
            raise InvalidUsage(f"timeout must be a positive whole number of seconds, got {seconds!r}")
        self._transport.timeout = seconds

    def _api(self, endpoint: str, body=None, params=None):
        """Call a control-plane endpoint and decode the JSON envelope."""
        method = self.api_method if body is None else None
        raw = self._transport.execute(
            f"{self.api_url}{endpoint}", body=body, params=params, method=method
        )
        envelope = decode_envelope(raw)
        if envelope is None:
            logger.debug(f"{endpoint}: empty or non-JSON response")
        return envelope

    def cat(self, cid: str) -> bytes:
        """
        Get file contents by CID from the gateway.

        Returns file content as bytes, verbatim.
        """
        return self._transport.execute(f"{self.ipfs_url}/{cid}")

    def add(self, content=None, path: Path = None) -> Optional[str]:
        """
        Add content to IPFS.

        Args:
            content: Bytes or str to upload
            path: Local file to upload instead of content

        Returns:
            The Hash of the added content, or None if the daemon's reply
            carried none

        Raises:
            InvalidUsage: If both or neither of content and path are given
        """
        body = body_mode(content=content, path=path)
        if body is None:
            raise InvalidUsage("add() needs content or a path")

        envelope = self._api("/add", body=body, params={"stream-channels": True})
        return _extract(envelope, "Hash")

    def add_file(self, path: Path) -> Optional[str]:
        """Add a local file, streamed from disk."""
        return self.add(path=path)

    def add_url(self, url: str) -> Optional[str]:
        """
        Fetch url over HTTP, then add the fetched bytes.

        The fetched content is sent inline, so it must not contain the fixed
        multipart boundary. Content that might (arbitrary binary downloads)
        should be saved to disk and added with add(path=...).

        Raises:
            InvalidUsage: If url is malformed, or the fetched content
                contains the multipart boundary
            NoResponse, HttpError, RemoteError: If the fetch or the add fails
        """
        logger.debug(f"add_url: fetching {url}")
        content = self._transport.execute(url)
        return self.add(content=content)

    def ls(self, cid: str) -> Optional[list]:
        """
        Return the links of a directory node.

        Returns list of dicts with: Name, Hash, Size, Type
        """
        envelope = self._api(f"/ls/{cid}")
        return _extract(envelope, "Objects", 0, "Links")

    def size(self, cid: str) -> Optional[int]:
        """Cumulative size in bytes of the DAG under cid."""
        envelope = self._api(f"/object/stat/{cid}")
        return _extract(envelope, "CumulativeSize")

    def pin_add(self, cid: str) -> Optional[list]:
        """Pin a CID. Returns the list of pinned CIDs."""
        envelope = self._api(f"/pin/add/{cid}")
        return _extract(envelope, "Pins")

    def pin_rm(self, cid: str) -> Optional[list]:
        """Unpin a CID. Returns the list of unpinned CIDs."""
        envelope = self._api(f"/pin/rm/{cid}")
        return _extract(envelope, "Pins")

    def version(self) -> Optional[str]:
        """Daemon version string, e.g. '0.29.0'."""
        envelope = self._api("/version")
        return _extract(envelope, "Version")

    def id(self) -> Optional[dict]:
        """
        Get IPFS peer information.

        Returns dict with: ID, PublicKey, Addresses, AgentVersion, ProtocolVersion
        """
        return self._api("/id")

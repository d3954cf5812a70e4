# Author: PB and Claude
# Date: 2026-10-19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# src/ipfs_http_api/types.py

"""
IPFS HTTP API Type Definitions

Value types shared by the transport and the client: the node endpoint and
the request body modes.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ipfs_http_api.errors import InvalidUsage


DEFAULT_HOST = "localhost"
DEFAULT_GATEWAY_PORT = 8080
DEFAULT_API_PORT = 5001
DEFAULT_TIMEOUT = 5     # seconds
DEFAULT_API_METHOD = "GET"
API_METHODS = ("GET", "POST")


@dataclass(frozen=True)
class Endpoint:
    """Host plus the two ports of one IPFS node."""
    host: str = DEFAULT_HOST
    gateway_port: int = DEFAULT_GATEWAY_PORT    # content retrieval
    api_port: int = DEFAULT_API_PORT            # control plane

    @property
    def ipfs_url(self) -> str:
        """Base URL for content retrieval, no trailing slash."""
        return f"http://{self.host}:{self.gateway_port}/ipfs"

    @property
    def api_url(self) -> str:
        """Base URL for all control-plane calls, no trailing slash."""
        return f"http://{self.host}:{self.api_port}/api/v0"

    def to_dict(self) -> dict:
        return {
            "host": self.host,
            "gateway_port": self.gateway_port,
            "api_port": self.api_port,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Endpoint":
        return cls(
            host=data.get("host", DEFAULT_HOST),
            gateway_port=int(data.get("gateway_port", DEFAULT_GATEWAY_PORT)),
            api_port=int(data.get("api_port", DEFAULT_API_PORT)),
        )


@dataclass(frozen=True)
class InlineBytes:
    """Request body taken from in-memory content."""
    content: bytes

    def __post_init__(self):
        if isinstance(self.content, str):
            object.__setattr__(self, "content", self.content.encode("utf-8"))
        elif isinstance(self.content, bytearray):
            object.__setattr__(self, "content", bytes(self.content))
        elif not isinstance(self.content, bytes):
            raise InvalidUsage(
                f"inline content must be bytes or str, not {type(self.content).__name__}"
            )

    def __len__(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class FilePath:
    """Request body streamed from a local file."""
    path: Path

    def __post_init__(self):
        object.__setattr__(self, "path", Path(self.path))

    @property
    def name(self) -> str:
        return self.path.name


# None means no body: the request stays a GET.
BodyMode = Optional[Union[InlineBytes, FilePath]]


def body_mode(content=None, path=None) -> BodyMode:
    """
    Build the body mode from two optional caller arguments.

    Args:
        content: In-memory bytes or str to upload
        path: Local file to upload

    Returns:
        InlineBytes, FilePath, or None when neither is given

    Raises:
        InvalidUsage: If both content and path are supplied
    """
    if content is not None and path is not None:
        raise InvalidUsage("Supply either inline content or a file path, not both")
    if content is not None:
        return InlineBytes(content)
    if path is not None:
        return FilePath(path)
    return None

# Author: PB and Claude
# Date: 2026-10-19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# src/ipfs_http_api/__init__.py

"""
IPFS HTTP API Client Library

A Python client for the HTTP API of an IPFS (kubo) node: add, retrieve,
list, size, pin and unpin content, and query the daemon.

Basic usage:
    from ipfs_http_api import IPFSClient

    ipfs = IPFSClient("localhost", 8080, 5001)
    cid = ipfs.add(b"hello")
    print(ipfs.cat(cid))

For more control:
    from ipfs_http_api.config import ClientConfig, load_config
    from ipfs_http_api.http_api import Transport
    from ipfs_http_api.types import Endpoint, FilePath, InlineBytes
"""

# Client
from ipfs_http_api.client import IPFSClient

# Config
from ipfs_http_api.config import ClientConfig, load_config

# Types
from ipfs_http_api.types import (
    DEFAULT_TIMEOUT,
    BodyMode,
    Endpoint,
    FilePath,
    InlineBytes,
    body_mode,
)

# Transport
from ipfs_http_api.http_api import Transport

# Errors
from ipfs_http_api.errors import (
    FileNotFound,
    HttpError,
    InvalidUsage,
    IPFSError,
    NoResponse,
    RemoteError,
    TransportError,
)

__all__ = [
    # Client
    "IPFSClient",
    # Config
    "ClientConfig",
    "load_config",
    # Types
    "DEFAULT_TIMEOUT",
    "BodyMode",
    "Endpoint",
    "FilePath",
    "InlineBytes",
    "body_mode",
    # Transport
    "Transport",
    # Errors
    "FileNotFound",
    "HttpError",
    "InvalidUsage",
    "IPFSError",
    "NoResponse",
    "RemoteError",
    "TransportError",
]

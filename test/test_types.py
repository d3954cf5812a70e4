# Author: PB and Claude
# Date: 2026-10-19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# test/test_types.py

"""Tests for endpoint and body mode types."""

import dataclasses
from pathlib import Path

import pytest

from ipfs_http_api.errors import InvalidUsage
from ipfs_http_api.types import (
    Endpoint,
    FilePath,
    InlineBytes,
    body_mode,
)


class TestEndpoint:
    def test_defaults(self):
        endpoint = Endpoint()
        assert endpoint.host == "localhost"
        assert endpoint.gateway_port == 8080
        assert endpoint.api_port == 5001

    def test_urls(self):
        endpoint = Endpoint("ipfs.example.org", 8081, 5002)
        assert endpoint.ipfs_url == "http://ipfs.example.org:8081/ipfs"
        assert endpoint.api_url == "http://ipfs.example.org:5002/api/v0"

    def test_immutable(self):
        endpoint = Endpoint()
        with pytest.raises(dataclasses.FrozenInstanceError):
            endpoint.host = "elsewhere"

    def test_to_dict(self):
        assert Endpoint("nas", 1, 2).to_dict() == {
            "host": "nas",
            "gateway_port": 1,
            "api_port": 2,
        }

    def test_from_dict_fills_defaults(self):
        endpoint = Endpoint.from_dict({"host": "nas", "api_port": "5005"})
        assert endpoint == Endpoint("nas", 8080, 5005)


class TestInlineBytes:
    def test_bytes_kept(self):
        assert InlineBytes(b"abc").content == b"abc"

    def test_str_encoded_as_utf8(self):
        body = InlineBytes("IPFS PHPUnit Test")
        assert body.content == b"IPFS PHPUnit Test"
        assert len(body) == 17

    def test_bytearray_converted(self):
        assert InlineBytes(bytearray(b"abc")).content == b"abc"

    def test_other_types_rejected(self):
        with pytest.raises(InvalidUsage):
            InlineBytes(12345)


class TestFilePath:
    def test_str_converted_to_path(self):
        body = FilePath("/data/report.pdf")
        assert body.path == Path("/data/report.pdf")
        assert body.name == "report.pdf"


class TestBodyMode:
    def test_neither(self):
        assert body_mode() is None

    def test_content(self):
        assert body_mode(content=b"x") == InlineBytes(b"x")

    def test_path(self):
        assert body_mode(path="/tmp/x") == FilePath(Path("/tmp/x"))

    def test_both_rejected(self):
        with pytest.raises(InvalidUsage, match="not both"):
            body_mode(content=b"x", path="/tmp/x")

    def test_both_rejected_is_value_error(self):
        with pytest.raises(ValueError):
            body_mode(content=b"x", path="/tmp/x")

    def test_empty_content_is_still_content(self):
        assert body_mode(content=b"") == InlineBytes(b"")

# Author: PB and Claude
# Date: 2026-10-19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# src/ipfs_http_api/cli.py

"""
IPFS HTTP API Command Line Interface

Thin wrapper around IPFSClient.
"""

from functools import wraps
import json
from pathlib import Path
import re
import sys

import click

from ipfs_http_api import config as config_module
from ipfs_http_api.errors import (
    FileNotFound,
    InvalidUsage,
    NoResponse,
    RemoteError,
    TransportError,
)


def validate_host(ctx, param, value):
    """Validate that --host looks like a valid hostname."""
    if value is None:
        return value
    if value.startswith("--"):
        raise click.BadParameter(
            f"'{value}' looks like a flag, not a hostname. "
            f"Did you forget to provide a value for --host?"
        )
    # Basic hostname validation (alphanumeric, hyphens, dots)
    if not re.match(r"^[a-zA-Z0-9][a-zA-Z0-9\-\.]*$", value):
        raise click.BadParameter(
            f"'{value}' doesn't look like a valid hostname"
        )
    return value


def handle_api_error(func):
    """Decorator to turn library errors into messages and exit codes."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (InvalidUsage, FileNotFound) as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(2)
        except RemoteError as e:
            click.echo(f"Error: IPFS daemon error: {e.message} (code {e.code})", err=True)
            sys.exit(1)
        except NoResponse as e:
            click.echo("Error: Could not reach IPFS node", err=True)
            if e.url:
                click.echo(f"  URL: {e.url}", err=True)
            click.echo("  Check --host value, config, or --timeout", err=True)
            sys.exit(1)
        except TransportError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        except ValueError as e:
            click.echo(f"Error: Invalid config: {e}", err=True)
            sys.exit(1)
    return wrapper


def echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2))


@click.group()
@click.option(
    "--config-file",
    type=click.Path(exists=True, path_type=Path),
    help="Config file path (default: ~/.config/ipfs-http-api/config.toml)",
)
@click.option(
    "--host",
    callback=validate_host,
    help="Override IPFS host to talk to (default: from config)",
)
@click.option("--timeout", type=click.IntRange(min=1), help="Request timeout in seconds")
@click.pass_context
def cli(ctx, config_file: Path, host: str, timeout: int):
    """IPFS HTTP API client."""
    ctx.ensure_object(dict)
    ctx.obj["config_file"] = config_file
    ctx.obj["host"] = host
    ctx.obj["timeout"] = timeout


def _client(ctx):
    """Build an IPFSClient from config plus command-line overrides."""
    cfg = config_module.load_config(ctx.obj["config_file"])
    if ctx.obj["host"]:
        cfg.host = ctx.obj["host"]
    if ctx.obj["timeout"]:
        cfg.timeout = ctx.obj["timeout"]
    return cfg.client()


@cli.command()
@click.argument("cid", required=True)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write content to this file instead of stdout",
)
@click.pass_context
@handle_api_error
def cat(ctx, cid: str, output: Path) -> None:
    """
    Retrieve the content of a CID from the gateway.
    """
    content = _client(ctx).cat(cid)
    if output:
        output.write_bytes(content)
        click.echo(f"wrote {len(content)} bytes to {output}", err=True)
    else:
        click.echo(content, nl=False)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path), required=True)
@click.pass_context
@handle_api_error
def add(ctx, path: Path) -> None:
    """
    Add a local file, streamed from disk.

    Examples:

        ipfs-http-api add /path/to/file
    """
    click.echo(_client(ctx).add_file(path))


@cli.command("add-content")
@click.argument("content", required=True)
@click.pass_context
@handle_api_error
def add_content(ctx, content: str) -> None:
    """
    Add CONTENT given on the command line ('-' reads stdin).
    """
    if content == "-":
        data = click.get_binary_stream("stdin").read()
    else:
        data = content.encode("utf-8")
    click.echo(_client(ctx).add(content=data))


@cli.command("add-url")
@click.argument("url", required=True)
@click.pass_context
@handle_api_error
def add_url(ctx, url: str) -> None:
    """
    Fetch URL over HTTP and add the fetched content.
    """
    click.echo(_client(ctx).add_url(url))


@cli.command()
@click.argument("cid", required=True)
@click.pass_context
@handle_api_error
def ls(ctx, cid: str) -> None:
    """
    List the links of a directory CID.
    """
    echo_json(_client(ctx).ls(cid))


@cli.command()
@click.argument("cid", required=True)
@click.pass_context
@handle_api_error
def size(ctx, cid: str) -> None:
    """
    Show the cumulative size of a CID in bytes.
    """
    click.echo(_client(ctx).size(cid))


@cli.command()
@click.argument("cid", required=True)
@click.pass_context
@handle_api_error
def pin(ctx, cid: str) -> None:
    """
    Pin a CID on the node.
    """
    echo_json(_client(ctx).pin_add(cid))


@cli.command()
@click.argument("cid", required=True)
@click.pass_context
@handle_api_error
def unpin(ctx, cid: str) -> None:
    """
    Remove the pin on a CID.
    """
    echo_json(_client(ctx).pin_rm(cid))


@cli.command()
@click.pass_context
@handle_api_error
def version(ctx) -> None:
    """
    Show the daemon version.
    """
    click.echo(_client(ctx).version())


@cli.command("id")
@click.pass_context
@handle_api_error
def id_(ctx) -> None:
    """
    Show the daemon identity.
    """
    echo_json(_client(ctx).id())


@cli.command()
@click.option(
    "--validate-only",
    is_flag=True,
    help="Only validate config, don't display it",
)
@click.pass_context
def config(ctx, validate_only: bool) -> None:
    """
    Display and validate client configuration.

    Examples:

        ipfs-http-api config                    # Display config with validation

        ipfs-http-api config --validate-only    # Just check for errors
    """
    config_path = ctx.obj["config_file"] or config_module.DEFAULT_USER_CONFIG

    try:
        cfg = config_module.load_config(ctx.obj["config_file"])
    except FileNotFoundError:
        click.echo(f"Error: Config file not found: {config_path}", err=True)
        sys.exit(1)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    errors, warnings = cfg.validate()

    if not validate_only:
        click.echo(f"Config file: {config_path}")
        click.echo()
        click.echo("Settings:")
        for key, value in cfg.to_dict().items():
            click.echo(f"  {key}: {value}")
        click.echo()
        endpoint = cfg.endpoint()
        click.echo(f"Gateway: {endpoint.ipfs_url}")
        click.echo(f"API:     {endpoint.api_url}")
        click.echo()

    if errors:
        click.echo("Errors:", err=True)
        for e in errors:
            click.echo(f"  ✗ {e}", err=True)
    if warnings:
        click.echo("Warnings:")
        for w in warnings:
            click.echo(f"  ⚠ {w}")
    if not errors and not warnings:
        click.echo("✓ Config is valid")

    sys.exit(1 if errors else 0)

#!/usr/bin/env python3
"""A simple client that opens a TCP stream, writes "hello world\\n", and closes
the connection.

Usage:
  python hello_world.py [host:port]

To start a server that this client can talk to on port 6142:

  ncat -l 6142

The address defaults to HELLO_ADDRESS (or "address" in config.jsonc), then
127.0.0.1:6142.
"""
import asyncio
import logging
import sys

from config import get_connect_timeout, get_setting

log = logging.getLogger(__name__)

DEFAULT_ADDRESS = "127.0.0.1:6142"
PAYLOAD = b"hello world\n"


class HelloStreamError(Exception):
    """Base class for stream client failures."""


class ConnectError(HelloStreamError):
    """Raised when the connection cannot be established."""


class WriteError(HelloStreamError):
    """Raised when the transport fails while sending on an open connection."""


def split_address(address: str):
    host, sep, port = address.rpartition(":")
    if not sep or not host:
        raise ConnectError(f"invalid address {address!r}: expected host:port")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port = int(port)
    except ValueError as exc:
        raise ConnectError(f"invalid port in address {address!r}") from exc
    if not 0 <= port <= 65535:
        raise ConnectError(f"port out of range in address {address!r}")
    return host, port


class Connection:
    """One open outbound stream, closed when the owning block exits."""

    def __init__(self, address: str, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        self.address = address
        self.reader = reader
        self.writer = writer

    @property
    def closed(self) -> bool:
        return self.writer.is_closing()

    async def close(self) -> None:
        if self.closed:
            return
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except OSError as exc:
            # already torn down by the peer
            log.debug("Error while closing %s: %s", self.address, exc)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def __repr__(self):
        state = "closed" if self.closed else "open"
        return f"<Connection {self.address} {state}>"


async def connect(address: str, timeout=None) -> Connection:
    host, port = split_address(address)
    log.debug("Connecting to %s (timeout=%s)", address, timeout)
    try:
        reader, writer = await asyncio.wait_for(asyncio.open_connection(host, port), timeout)
    except asyncio.TimeoutError as exc:
        raise ConnectError(f"connection to {address} timed out") from exc
    except (OSError, UnicodeError) as exc:
        # UnicodeError: host rejected by the idna codec before resolution
        raise ConnectError(f"could not connect to {address}: {exc}") from exc
    return Connection(address, reader, writer)


async def write_all(conn: Connection, data: bytes) -> None:
    try:
        conn.writer.write(data)
        await conn.writer.drain()
    except OSError as exc:
        raise WriteError(f"write to {conn.address} failed: {exc}") from exc


async def run(address: str = DEFAULT_ADDRESS, timeout=None) -> bool:
    """Connect, send PAYLOAD once and report the outcome on stdout.

    ConnectError propagates to the caller. A failed write is only reported:
    the return value is False and the flow still completes normally.
    """
    async with await connect(address, timeout) as conn:
        print("created stream")

        try:
            await write_all(conn, PAYLOAD)
            success = True
        except WriteError as exc:
            log.warning("%s", exc)
            success = False
        print(f"wrote to stream; success={str(success).lower()}")

    return success


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) > 1:
        print("Usage: python hello_world.py [host:port]", file=sys.stderr)
        return 2

    address = args[0] if args else get_setting("HELLO_ADDRESS", "address", DEFAULT_ADDRESS)
    try:
        asyncio.run(run(address, get_connect_timeout()))
    except ConnectError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

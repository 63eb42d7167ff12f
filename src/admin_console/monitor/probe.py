# src/admin_console/monitor/probe.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import time

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 0.5


def parse_address(address: str) -> tuple[str, int] | None:
    """
    Split "host:port" (or "[v6]:port"). Returns None when malformed.
    """
    raw = (address or "").strip()
    host, sep, port_s = raw.rpartition(":")
    if not sep or not host or not port_s.isdigit():
        return None
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    elif ":" in host:
        # bare IPv6 without brackets is ambiguous
        return None
    port = int(port_s)
    if not 0 < port < 65536 or not host:
        return None
    return host, port


async def probe_target(address: str, timeout: float = DEFAULT_TIMEOUT) -> tuple[bool, int]:
    """
    TCP connect probe.

    Returns (True, latency_ms) on success, (False, 0) on any failure, timeout or
    malformed address. Never raises.
    """
    parsed = parse_address(address)
    if parsed is None:
        logger.debug("Malformed target address %r treated as unreachable", address)
        return False, 0

    host, port = parsed
    start = time.perf_counter()
    try:
        _reader, writer = await asyncio.wait_for(asyncio.open_connection(host, port), timeout)
    except (OSError, asyncio.TimeoutError):
        return False, 0

    latency = int((time.perf_counter() - start) * 1000)
    writer.close()
    with contextlib.suppress(Exception):
        await writer.wait_closed()
    return True, latency

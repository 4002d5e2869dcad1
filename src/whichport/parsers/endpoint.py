from __future__ import annotations

from typing import Optional

MAX_PORT = 65535


def parse_port_from_endpoint(endpoint: str) -> Optional[int]:
    """Return the port after the last colon of ``endpoint``, or None.

    ``*:80``, ``127.0.0.1:5432`` and ``[::1]:5432`` all work since the port is
    always the final colon-separated field.
    """
    _, sep, port_str = endpoint.rpartition(":")
    if not sep:
        return None
    if not (port_str.isascii() and port_str.isdigit()):
        return None
    port = int(port_str)
    if port > MAX_PORT:
        return None
    return port

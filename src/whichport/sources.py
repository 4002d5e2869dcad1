from __future__ import annotations

from typing import List, Optional, Tuple

import psutil

from whichport.config import ToolSettings
from whichport.errors import CommandFailed
from whichport.logging import get_logger
from whichport.models import Listener
from whichport.parsers import parse_lsof_output, parse_ss_output
from whichport.parsers.ss import UNKNOWN_COMMAND, UNKNOWN_USER
from whichport.utils import run

log = get_logger(__name__)


def ss_listeners(tool: ToolSettings) -> List[Listener]:
    cp = run(tool.argv())
    listeners = parse_ss_output(cp.stdout or "")
    log.debug("%s reported %d listeners", tool.command, len(listeners))
    return listeners


def lsof_listeners(tool: ToolSettings) -> List[Listener]:
    cp = run(tool.argv())
    listeners = parse_lsof_output(cp.stdout or "")
    log.debug("%s reported %d listeners", tool.command, len(listeners))
    return listeners


def _format_endpoint(ip: str, port: int) -> str:
    if ":" in ip:
        return f"[{ip}]:{port}"
    return f"{ip}:{port}"


def _process_identity(pid: Optional[int]) -> Tuple[str, str]:
    if not pid:
        return UNKNOWN_COMMAND, UNKNOWN_USER
    try:
        proc = psutil.Process(pid)
        name = proc.name() or UNKNOWN_COMMAND
    except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
        return UNKNOWN_COMMAND, UNKNOWN_USER
    try:
        user = proc.username() or UNKNOWN_USER
    except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess, KeyError):
        user = UNKNOWN_USER
    return name, user


def psutil_listeners() -> List[Listener]:
    """Listening TCP sockets straight from the kernel tables via psutil."""
    try:
        conns = psutil.net_connections(kind="tcp")
    except psutil.AccessDenied as e:
        raise CommandFailed("psutil", f"access denied: {e}") from e
    except OSError as e:
        raise CommandFailed("psutil", str(e)) from e

    items: list[Listener] = []
    for c in conns:
        if c.status != psutil.CONN_LISTEN or not c.laddr:
            continue
        command, user = _process_identity(c.pid)
        items.append(
            Listener(
                port=c.laddr.port,
                pid=c.pid,
                command=command,
                user=user,
                endpoint=_format_endpoint(c.laddr.ip, c.laddr.port),
            )
        )
    log.debug("psutil reported %d listening sockets", len(items))
    return items

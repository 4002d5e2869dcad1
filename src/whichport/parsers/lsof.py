"""Parser for ``lsof -F`` field output.

Every line is a single tag character followed by its value, e.g.::

    p1234
    cpostgres
    u501
    Lrexfelix
    f7
    n127.0.0.1:5432
    TST=LISTEN

A ``p`` line opens a process block; the ``n`` lines that follow name its
sockets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from whichport.logging import get_logger
from whichport.models import Listener
from whichport.parsers.common import unique_sorted
from whichport.parsers.endpoint import parse_port_from_endpoint

log = get_logger(__name__)


@dataclass
class _ProcessBlock:
    pid: Optional[int] = None
    command: Optional[str] = None
    user: Optional[str] = None
    has_login: bool = False


def _parse_pid(value: str) -> Optional[int]:
    if value.isascii() and value.isdigit():
        return int(value)
    return None


def parse_lsof_output(raw: str) -> List[Listener]:
    block = _ProcessBlock()
    records: list[Listener] = []
    skipped = 0

    for line in raw.splitlines():
        if not line:
            continue
        tag, value = line[0], line[1:]
        if tag == "p":
            block = _ProcessBlock(pid=_parse_pid(value))
        elif tag == "c":
            block.command = value
        elif tag == "L":
            block.user = value
            block.has_login = True
        elif tag == "u":
            # numeric uid only when no login name was reported
            if not block.has_login:
                block.user = value
        elif tag == "n":
            port = parse_port_from_endpoint(value)
            if port is None or block.command is None or block.user is None:
                skipped += 1
                continue
            records.append(
                Listener(
                    port=port,
                    pid=block.pid,
                    command=block.command,
                    user=block.user,
                    endpoint=value,
                )
            )

    if skipped:
        log.debug("lsof: skipped %d socket lines without port or owner", skipped)
    return unique_sorted(records)

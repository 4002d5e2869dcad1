"""Parser for ``ss -lntpH`` output.

Sample line::

    LISTEN 0 4096 127.0.0.53%lo:53 0.0.0.0:* users:(("systemd-resolve",pid=728,fd=14))

Columns are state, recv-q, send-q, local address, peer address and the
optional process column.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from whichport.logging import get_logger
from whichport.models import Listener
from whichport.parsers.common import unique_sorted
from whichport.parsers.endpoint import parse_port_from_endpoint

log = get_logger(__name__)

UNKNOWN_USER = "-"
UNKNOWN_COMMAND = "unknown"
_PID_MARKER = "pid="


def parse_ss_process_info(raw: str) -> Tuple[Optional[int], str]:
    """Pull ``(pid, command)`` out of a ``users:((...))`` blob.

    The command is the first quoted string and the pid the digits after the
    first ``pid=``. Each is looked up on its own, so either may be missing.
    """
    command = UNKNOWN_COMMAND
    pid: Optional[int] = None

    start = raw.find('"')
    if start != -1:
        end = raw.find('"', start + 1)
        if end != -1:
            command = raw[start + 1 : end]

    idx = raw.find(_PID_MARKER)
    if idx != -1:
        digits = []
        for ch in raw[idx + len(_PID_MARKER) :]:
            if not ("0" <= ch <= "9"):
                break
            digits.append(ch)
        if digits:
            pid = int("".join(digits))

    return pid, command


def parse_ss_output(raw: str) -> List[Listener]:
    records: list[Listener] = []
    skipped = 0

    for line in raw.splitlines():
        if not line.strip():
            continue
        tokens = line.split()
        if len(tokens) < 4:
            skipped += 1
            continue
        endpoint = tokens[3]
        port = parse_port_from_endpoint(endpoint)
        if port is None:
            skipped += 1
            continue
        blob = " ".join(tokens[5:])
        pid, command = parse_ss_process_info(blob)
        records.append(
            Listener(
                port=port,
                pid=pid,
                command=command,
                user=UNKNOWN_USER,
                endpoint=endpoint,
            )
        )

    if skipped:
        log.debug("ss: skipped %d malformed lines", skipped)
    return unique_sorted(records)

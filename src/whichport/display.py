from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence

from rich import box
from rich.table import Table
from rich.text import Text

from whichport.aggregate import listeners_for_port
from whichport.errors import OutputError
from whichport.logging import console
from whichport.models import AggregatedListener


def pid_display(pid: Optional[int]) -> str:
    return "unknown" if pid is None else str(pid)


def format_listener_line(listener: AggregatedListener) -> str:
    endpoints = ", ".join(listener.endpoints)
    return (
        f"port {listener.port}: {listener.command} "
        f"(pid {pid_display(listener.pid)}, user {listener.user}) "
        f"on [{endpoints}] | {listener.role.description} ({listener.role.confidence})"
    )


def build_text_meta_lines(source: str, timestamp: int, errors: Sequence[str]) -> List[str]:
    lines = [
        f"meta source: {source}",
        f"meta timestamp: {timestamp}",
        f"meta errors: {len(errors)}",
    ]
    lines.extend(f"meta error: {err}" for err in errors)
    return lines


def build_ports_lines(aggregated: Sequence[AggregatedListener], ports: Sequence[int]) -> List[str]:
    lines: List[str] = []
    for port in ports:
        matches = listeners_for_port(aggregated, port)
        if not matches:
            lines.append(f"port {port}: not listening")
            continue
        lines.extend(format_listener_line(m) for m in matches)
    return lines


def build_all_lines(aggregated: Sequence[AggregatedListener]) -> List[str]:
    if not aggregated:
        return ["no listening ports found"]
    return [format_listener_line(a) for a in aggregated]


# ---------------- JSON payloads ----------------

def build_ports_payload(
    aggregated: Sequence[AggregatedListener],
    ports: Sequence[int],
    source: str,
    timestamp: int,
    errors: Sequence[str],
) -> Dict[str, Any]:
    results = []
    for port in ports:
        matches = listeners_for_port(aggregated, port)
        results.append(
            {
                "port": port,
                "listening": bool(matches),
                "listeners": [m.to_dict() for m in matches],
            }
        )
    return {
        "mode": "ports",
        "source": source,
        "timestamp": timestamp,
        "errors": list(errors),
        "results": results,
    }


def build_all_payload(
    aggregated: Sequence[AggregatedListener],
    source: str,
    timestamp: int,
    errors: Sequence[str],
) -> Dict[str, Any]:
    return {
        "mode": "all",
        "source": source,
        "timestamp": timestamp,
        "errors": list(errors),
        "results": [a.to_dict() for a in aggregated],
    }


def dump_json(payload: Dict[str, Any]) -> str:
    try:
        return json.dumps(payload)
    except (TypeError, ValueError) as e:
        raise OutputError(f"failed to serialize JSON: {e}") from e


# ---------------- Rendering ----------------

def build_listeners_render(
    aggregated: Sequence[AggregatedListener],
    ports: Optional[Sequence[int]] = None,
) -> Table:
    t = Table(title="Listening Ports", box=box.SIMPLE_HEAVY, show_lines=False)
    for h in ("Port", "PID", "Command", "User", "Endpoints", "Role", "Confidence"):
        t.add_column(h)

    def _row(a: AggregatedListener) -> None:
        t.add_row(
            *(
                Text(cell)
                for cell in (
                    str(a.port),
                    pid_display(a.pid),
                    a.command,
                    a.user,
                    ", ".join(a.endpoints),
                    a.role.description,
                    a.role.confidence,
                )
            )
        )

    if ports is None:
        for a in aggregated:
            _row(a)
        return t

    for port in ports:
        matches = listeners_for_port(aggregated, port)
        if not matches:
            t.add_row(str(port), "-", "-", "-", "-", "not listening", "-")
        for m in matches:
            _row(m)
    return t


def print_lines(lines: Sequence[str]) -> None:
    for line in lines:
        console().print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)


def print_json_text(text: str) -> None:
    console().print_json(text, indent=None)

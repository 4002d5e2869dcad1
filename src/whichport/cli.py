from __future__ import annotations

import logging
import time
from typing import List, Optional, Sequence

import typer

from whichport.aggregate import aggregate_listeners
from whichport.collector import SOURCES, collect_listeners, strategies_for
from whichport.config import CollectorSettings, OutputSettings
from whichport.display import (
    build_all_lines,
    build_all_payload,
    build_listeners_render,
    build_ports_lines,
    build_ports_payload,
    build_text_meta_lines,
    dump_json,
    print_json_text,
    print_lines,
)
from whichport.errors import NoPortsError, WhichportError
from whichport.logging import console, err_console, get_logger, set_level
from whichport.models import CollectionResult

app = typer.Typer(
    name="whichport",
    add_completion=False,
    help="Query listening TCP ports and the processes behind them.",
)

log = get_logger("whichport")


def parse_port(value: str) -> int:
    digits = value[1:] if value.startswith("+") else value
    if not (digits.isascii() and digits.isdigit()):
        raise typer.BadParameter(f"invalid port: {value}")
    port = int(digits)
    if not 0 <= port <= 65535:
        raise typer.BadParameter(f"invalid port: {value}")
    if port == 0:
        raise typer.BadParameter("port 0 is reserved and cannot be queried")
    return port


def unix_timestamp() -> int:
    return int(time.time())


def emit_report(
    result: CollectionResult,
    ports: Optional[Sequence[int]],
    output: OutputSettings,
    timestamp: int,
) -> None:
    """Print one collection; ``ports=None`` means every listener."""
    aggregated = aggregate_listeners(result.listeners)

    if output.json_output:
        if ports is None:
            payload = build_all_payload(aggregated, result.source, timestamp, result.errors)
        else:
            payload = build_ports_payload(aggregated, ports, result.source, timestamp, result.errors)
        print_json_text(dump_json(payload))
        return

    if output.verbose:
        print_lines(build_text_meta_lines(result.source, timestamp, result.errors))
    if output.table:
        console().print(build_listeners_render(aggregated, ports))
    elif ports is None:
        print_lines(build_all_lines(aggregated))
    else:
        print_lines(build_ports_lines(aggregated, ports))


@app.command()
def main(
    ctx: typer.Context,
    ports: Optional[List[str]] = typer.Argument(None, help="Port numbers to query (1-65535)."),
    all_: bool = typer.Option(False, "--all", help="Report every listening port."),
    json: bool = typer.Option(False, "--json", help="Output in JSON format."),
    verbose: bool = typer.Option(False, "--verbose", help="Include collection metadata in text output."),
    source: str = typer.Option("auto", "--source", help="auto|ss|lsof|psutil"),
    table: bool = typer.Option(False, "--table", help="Render text output as a table."),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logs on stderr."),
) -> None:
    """Show which processes listen on the given TCP ports."""
    if debug:
        set_level(logging.DEBUG)
    if source not in SOURCES:
        raise typer.BadParameter(f"Invalid source: {source}. Choose one of: {', '.join(SOURCES)}")
    port_list = [parse_port(p) for p in ports or []]
    output = OutputSettings(json_output=json, verbose=verbose, table=table)
    settings = CollectorSettings()

    try:
        if not all_ and not port_list:
            err_console().print(ctx.get_usage(), markup=False, highlight=False, emoji=False)
            raise NoPortsError()
        result = collect_listeners(strategies_for(source, settings), settings)
        log.debug("Collected %d listeners from %s", len(result.listeners), result.source)
        emit_report(result, None if all_ else port_list, output, unix_timestamp())
    except WhichportError as e:
        err_console().print(f"error: {e}", markup=False, highlight=False, emoji=False, soft_wrap=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()

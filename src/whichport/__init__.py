from __future__ import annotations

from .aggregate import aggregate_listeners, listeners_for_port
from .collector import CollectionStrategy, collect_listeners, default_strategies
from .models import AggregatedListener, CollectionResult, Listener, Role
from .parsers import (
    parse_lsof_output,
    parse_port_from_endpoint,
    parse_ss_output,
    parse_ss_process_info,
)
from .roles import infer_role

__all__ = [
    "aggregate_listeners",
    "listeners_for_port",
    "CollectionStrategy",
    "collect_listeners",
    "default_strategies",
    "AggregatedListener",
    "CollectionResult",
    "Listener",
    "Role",
    "parse_lsof_output",
    "parse_port_from_endpoint",
    "parse_ss_output",
    "parse_ss_process_info",
    "infer_role",
]

__version__ = "0.1.0"

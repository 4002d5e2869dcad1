from __future__ import annotations

from .endpoint import parse_port_from_endpoint
from .lsof import parse_lsof_output
from .ss import parse_ss_output, parse_ss_process_info

__all__ = [
    "parse_port_from_endpoint",
    "parse_lsof_output",
    "parse_ss_output",
    "parse_ss_process_info",
]

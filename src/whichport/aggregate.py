from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from whichport.models import AggregatedListener, Listener
from whichport.roles import infer_role

_Key = Tuple[int, Optional[int], str, str]


def _order(key: _Key) -> Tuple[int, int, int, str, str]:
    port, pid, command, user = key
    # absent pid sorts as 0, ahead of a real pid 0
    return (port, pid or 0, 0 if pid is None else 1, command, user)


def aggregate_listeners(listeners: Iterable[Listener]) -> List[AggregatedListener]:
    grouped: Dict[_Key, Set[str]] = {}
    for item in listeners:
        key = (item.port, item.pid, item.command, item.user)
        grouped.setdefault(key, set()).add(item.endpoint)

    out: List[AggregatedListener] = []
    for key in sorted(grouped, key=_order):
        port, pid, command, user = key
        endpoints = tuple(sorted(grouped[key]))
        out.append(
            AggregatedListener(
                port=port,
                pid=pid,
                command=command,
                user=user,
                endpoint=endpoints[0],
                endpoints=endpoints,
                role=infer_role(port, command),
            )
        )
    return out


def listeners_for_port(aggregated: Sequence[AggregatedListener], port: int) -> List[AggregatedListener]:
    return [a for a in aggregated if a.port == port]

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import partial
from typing import Callable, List, Optional, Sequence

from whichport.config import CollectorSettings
from whichport.errors import AllMethodsFailed, ToolError
from whichport.logging import get_logger
from whichport.models import CollectionResult, Listener
from whichport.parsers.common import unique_sorted
from whichport import sources

log = get_logger(__name__)

SOURCES: tuple[str, ...] = ("auto", "ss", "lsof", "psutil")


@dataclass(frozen=True)
class CollectionStrategy:
    name: str
    fetch: Callable[[], List[Listener]]


def is_linux(platform: Optional[str] = None) -> bool:
    return (platform or sys.platform).startswith("linux")


def build_strategy(name: str, settings: Optional[CollectorSettings] = None) -> CollectionStrategy:
    settings = settings or CollectorSettings()
    if name == "ss":
        return CollectionStrategy("ss", partial(sources.ss_listeners, settings.ss))
    if name == "lsof":
        return CollectionStrategy("lsof", partial(sources.lsof_listeners, settings.lsof))
    if name == "psutil":
        return CollectionStrategy("psutil", lambda: unique_sorted(sources.psutil_listeners()))
    raise ValueError(f"unknown collection source: {name}")


def default_strategies(
    settings: Optional[CollectorSettings] = None,
    platform: Optional[str] = None,
) -> List[CollectionStrategy]:
    """ss then lsof on Linux, lsof alone elsewhere."""
    names = ["ss", "lsof"] if is_linux(platform) else ["lsof"]
    return [build_strategy(n, settings) for n in names]


def strategies_for(
    source: str,
    settings: Optional[CollectorSettings] = None,
    platform: Optional[str] = None,
) -> List[CollectionStrategy]:
    if source == "auto":
        return default_strategies(settings, platform)
    return [build_strategy(source, settings)]


def collect_listeners(
    strategies: Optional[Sequence[CollectionStrategy]] = None,
    settings: Optional[CollectorSettings] = None,
) -> CollectionResult:
    """Try each strategy in turn and return the first that succeeds.

    Failures before the winner are kept in ``CollectionResult.errors``. If
    nothing succeeds, ``AllMethodsFailed`` carries every message.
    """
    settings = settings or CollectorSettings()
    if strategies is None:
        strategies = default_strategies(settings)

    errors: list[str] = []
    for strategy in strategies:
        log.debug("Collecting listeners with %s", strategy.name)
        try:
            listeners = strategy.fetch()
        except ToolError as e:
            log.debug("%s failed: %s", strategy.name, e)
            errors.append(str(e))
            continue
        return CollectionResult(listeners=listeners, source=strategy.name, errors=errors)

    raise AllMethodsFailed(errors, settings.error_separator)

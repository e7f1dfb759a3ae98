"""Capability-checked counts of outstanding handles and in-flight work.

Neither count is available everywhere, so each probe answers either
``Supported(count)`` or ``UNSUPPORTED`` and callers report 0 for the latter.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import psutil

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Supported:
    count: int


@dataclass(frozen=True)
class Unsupported:
    reason: str = ""


UNSUPPORTED = Unsupported()

Capability = Supported | Unsupported


def active_handles(proc: psutil.Process | None = None) -> Capability:
    """Open file descriptors (POSIX) or kernel handles (Windows)."""
    proc = proc or psutil.Process()
    probe = getattr(proc, "num_fds", None) or getattr(proc, "num_handles", None)
    if probe is None:
        return Unsupported("no descriptor/handle introspection on this platform")
    try:
        return Supported(int(probe()))
    except (psutil.Error, OSError) as exc:
        logger.debug("Handle introspection failed: %s", exc)
        return Unsupported(str(exc))


def active_requests() -> Capability:
    """Unfinished asyncio tasks on the running loop."""
    try:
        tasks = asyncio.all_tasks()
    except RuntimeError:
        return Unsupported("no running event loop")
    return Supported(len(tasks))


def count_or_zero(capability: Capability) -> int:
    if isinstance(capability, Supported):
        return capability.count
    return 0

from .host import cpu_info, load_average, memory
from .introspection import Supported, Unsupported, UNSUPPORTED, active_handles, active_requests
from .process import health, process_memory, threads, uptime

__all__ = [
    "Supported",
    "Unsupported",
    "UNSUPPORTED",
    "active_handles",
    "active_requests",
    "cpu_info",
    "health",
    "load_average",
    "memory",
    "process_memory",
    "threads",
    "uptime",
]

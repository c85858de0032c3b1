# stopclock/term_io/__init__.py
# Terminal & filesystem I/O helpers (console proxy, JSON persistence)

from .console import console, get_console, configure_console, reset_console
from .generics import read_json_safe, write_json_safe, ensure_parent

__all__ = [
    "console",
    "get_console",
    "configure_console",
    "reset_console",
    "read_json_safe",
    "write_json_safe",
    "ensure_parent",
]

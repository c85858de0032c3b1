# stopclock/core/debug.py
# Debug logging utilities - delegates to unified OutputManager

from typing import Any, Mapping

from .output import get_output_manager


# * Check if debug mode is enabled (based on output level)
def is_debug_enabled() -> bool:
    return get_output_manager().is_debug_enabled()


# * Print debug message if debug mode is enabled
def debug_print(message: str, category: str = "DEBUG") -> None:
    get_output_manager().debug(message, category)


# * Print error details in debug mode
def debug_error(error: BaseException, context: str = "") -> None:
    error_msg = f"Exception: {type(error).__name__}: {str(error)}"
    if context:
        error_msg = f"{context} - {error_msg}"
    get_output_manager().debug(error_msg, "ERROR")


# * Trace one wire message crossing the clock channel
def debug_message(direction: str, payload: Mapping[str, Any]) -> None:
    fields = ", ".join(f"{k}={v}" for k, v in payload.items() if k != "type")
    msg = f"{direction} {payload.get('type')}"
    if fields:
        msg += f" ({fields})"
    get_output_manager().debug(msg, "MSG")

# stopclock/cli/decorators.py
# CLI decorator mapping stopclock errors to Rich-formatted messages & exit status 1

import functools
from typing import Callable, TypeVar, Any, cast

from ..core.debug import debug_error
from ..core.exceptions import (
    StopclockError,
    ValidationError,
    TimerStateError,
    ClockError,
    ConfigurationError,
    JSONParsingError,
    FileOperationError,
    format_error_message,
)

F = TypeVar("F", bound=Callable[..., Any])

# first match wins; keep subclasses ahead of StopclockError
_ERROR_LABELS: tuple[tuple[type[BaseException], str], ...] = (
    (ValidationError, "Invalid Time"),
    (TimerStateError, "Timer State Error"),
    (ClockError, "Clock Error"),
    (ConfigurationError, "Configuration Error"),
    (JSONParsingError, "JSON Parsing Error"),
    (FileOperationError, "File Error"),
    (StopclockError, "Error"),
)


def _label_for(error: Exception) -> str:
    for error_type, label in _ERROR_LABELS:
        if isinstance(error, error_type):
            return label
    return "Unexpected Error"


# * Decorator for stopclock CLI commands: print the error & exit w/ status 1
def handle_stopclock_error(func: F) -> F:
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        # ! Lazy import to avoid circular dependencies
        from ..term_io.console import console

        try:
            return func(*args, **kwargs)
        except Exception as e:
            debug_error(e, func.__name__)
            console.print(format_error_message(_label_for(e), str(e)))
            raise SystemExit(1)

    return cast(F, wrapper)

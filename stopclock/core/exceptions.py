# stopclock/core/exceptions.py
# Custom exception hierarchy for stopclock (pure - no I/O operations)

from pathlib import Path
from typing import Any


# * Format error message for display (pure string formatting, no I/O)
def format_error_message(error_type: str, message: str) -> str:
    return f"[red]{error_type}:[/] {message}"


# * Base exception for stopclock
class StopclockError(Exception):
    pass


# * Validation error for rejected user input; never mutates session state
class ValidationError(StopclockError):
    pass


# * Time edit rejected (malformed text or value outside the editable range)
class TimeEditError(ValidationError):
    def __init__(self, message: str, value: Any):
        super().__init__(message)
        self.value = value

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, value={self.value!r})"


# * Operation not permitted in the session's current run state
class TimerStateError(StopclockError):
    def __init__(self, message: str, run_state: str):
        super().__init__(message)
        self.run_state = run_state

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.args[0]!r}, run_state={self.run_state!r})"
        )


# * Clock source errors
class ClockError(StopclockError):
    pass


# * Isolated execution context could not be created
class ClockConstructionError(ClockError):
    pass


# * Isolated execution context failed after construction
class ClockFault(ClockError):
    def __init__(self, message: str, exitcode: int | None = None):
        super().__init__(message)
        self.exitcode = exitcode

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, exitcode={self.exitcode!r})"


# * Configuration errors
class ConfigurationError(StopclockError):
    pass


# * Settings value validation failed
class SettingsValidationError(ConfigurationError):
    def __init__(self, message: str, setting_name: str, value: Any):
        super().__init__(message)
        self.setting_name = setting_name
        self.value = value

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.args[0]!r}, "
            f"setting_name={self.setting_name!r}, value={self.value!r})"
        )


# * JSON parsing errors
class JSONParsingError(StopclockError):
    pass


# * Base error for file I/O operations
class FileOperationError(StopclockError):
    def __init__(self, message: str, path: Path | str):
        super().__init__(message)
        self.path = Path(path) if isinstance(path, str) else path

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, path={self.path!r})"

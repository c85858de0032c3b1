# stopclock/core/constants.py
# Constants & enums for timer modes, run states & time unit conversions

from enum import Enum


# * Time unit constants
MS_PER_CENTISECOND = 10
MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
CENTISECONDS_PER_SECOND = 100

# * Clock cadence defaults (~60Hz ticks & frames)
DEFAULT_TICK_RATE_MS = 16
DEFAULT_FRAME_RATE = 60

# * Countdown target used when none has been saved
DEFAULT_COUNTDOWN_MS = 5 * MS_PER_MINUTE

# largest value the hh:mm:ss.cc editor can express (99:59:59.99)
MAX_EDITABLE_MS = 99 * MS_PER_HOUR + 59 * MS_PER_MINUTE + 59 * MS_PER_SECOND + 990


# * Timer interpretation mode; values double as the persisted representation
class TimerMode(Enum):
    STOPWATCH = "stopwatch"
    COUNTDOWN = "countdown"


# * Run state of the timer session
class TimerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"

# stopclock/core/timecodec.py
# Time codec: milliseconds <-> hh:mm:ss.cc strings (pure functions)

from __future__ import annotations

import re
from dataclasses import dataclass

from .constants import (
    MS_PER_CENTISECOND,
    MS_PER_SECOND,
    MS_PER_MINUTE,
    MS_PER_HOUR,
    CENTISECONDS_PER_SECOND,
)
from .exceptions import TimeEditError

# strict editor pattern; ASCII digits only, 1-2 digits per field
TIME_PATTERN = re.compile(r"^([0-9]{1,2}):([0-9]{1,2}):([0-9]{1,2})\.([0-9]{1,2})$")

TIME_FORMAT_HINT = "hh:mm:ss.cs"


# * Zero-padded display components of a millisecond count
@dataclass(frozen=True)
class TimeParts:
    hh: str
    mm: str
    ss: str
    cc: str

    # hh:mm:ss portion shown in the large display
    @property
    def main(self) -> str:
        return f"{self.hh}:{self.mm}:{self.ss}"

    # .cc portion shown beside the main digits
    @property
    def fraction(self) -> str:
        return f".{self.cc}"

    def __str__(self) -> str:
        return f"{self.main}{self.fraction}"


# * Split milliseconds into zero-padded hh/mm/ss/cc (hours unbounded)
def format_time(ms: int | float) -> TimeParts:
    total_cs = int(ms) // MS_PER_CENTISECOND
    cs = total_cs % CENTISECONDS_PER_SECOND
    total_seconds = total_cs // CENTISECONDS_PER_SECOND
    seconds = total_seconds % 60
    total_minutes = total_seconds // 60
    minutes = total_minutes % 60
    hours = total_minutes // 60

    return TimeParts(
        hh=f"{hours:02d}",
        mm=f"{minutes:02d}",
        ss=f"{seconds:02d}",
        cc=f"{cs:02d}",
    )


# * Render milliseconds as hh:mm:ss.cc
def ms_to_string(ms: int | float) -> str:
    return str(format_time(ms))


# * Parse hh:mm:ss.cc to milliseconds; returns None when invalid
def parse_time(text: str) -> int | None:
    match = TIME_PATTERN.match(text.strip())
    if not match:
        return None

    hours, minutes, seconds, centiseconds = (int(g) for g in match.groups())

    if minutes >= 60 or seconds >= 60 or centiseconds >= CENTISECONDS_PER_SECOND:
        return None

    return (
        hours * MS_PER_HOUR
        + minutes * MS_PER_MINUTE
        + seconds * MS_PER_SECOND
        + centiseconds * MS_PER_CENTISECOND
    )


# * Parse hh:mm:ss.cc or raise TimeEditError naming the expected format
def parse_time_strict(text: str) -> int:
    ms = parse_time(text)
    if ms is None:
        raise TimeEditError(f"Invalid time '{text}'. Use {TIME_FORMAT_HINT}", text)
    return ms

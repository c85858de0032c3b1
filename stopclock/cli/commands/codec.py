# stopclock/cli/commands/codec.py
# Time codec commands: format milliseconds & parse hh:mm:ss.cc strings

from __future__ import annotations

import typer

from ...core.timecodec import ms_to_string, parse_time_strict
from ...term_io.console import console
from ..app import app
from ..decorators import handle_stopclock_error


# * Print milliseconds as hh:mm:ss.cc
@app.command(name="format")
@handle_stopclock_error
def format_cmd(
    ms: int = typer.Argument(..., min=0, help="Milliseconds to format"),
) -> None:
    console.print(ms_to_string(ms), highlight=False)


# * Print the millisecond value of an hh:mm:ss.cc string
@app.command(name="parse")
@handle_stopclock_error
def parse_cmd(
    text: str = typer.Argument(..., help="Time in hh:mm:ss.cs form (1-2 digits per field)"),
) -> None:
    console.print(str(parse_time_strict(text)), highlight=False)

# stopclock/cli/app.py
# Root Typer application & command registration
#
# ! Command imports at bottom of file are deferred to avoid circular dependencies.

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

# load environment variables (e.g. STOPCLOCK_CONFIG) before settings are resolved
load_dotenv()

from ..config.settings import settings_manager
from ..term_io.console import console


app = typer.Typer(
    rich_markup_mode="rich",
    add_completion=False,
    no_args_is_help=False,
    help="Dual-clock stopwatch & countdown timer",
    context_settings={"help_option_names": ["--help", "-h"]},
)


# * Load settings & initialize output before any subcommand runs
@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging (clock selection, state changes)"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output"),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Write verbose logs to file (enables verbose mode)"
    ),
) -> None:
    from ..ui.console_theme import initialize_theme

    initialize_theme()

    # respect injected ctx.obj from tests/embedding; only load if absent
    if getattr(ctx, "obj", None) is None:
        ctx.obj = settings_manager.load()

    # must be after settings load to check dev_mode
    from ..core.verbose import init_verbose, cleanup_verbose

    verbose_enabled = verbose or log_file is not None
    dev_mode = ctx.obj.dev_mode if hasattr(ctx.obj, "dev_mode") else False
    init_verbose(enabled=verbose_enabled, log_file=log_file, dev_mode=dev_mode, quiet=quiet)
    # close the log file once the subcommand finishes
    ctx.call_on_close(cleanup_verbose)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        ctx.exit()


# ! import command modules here to avoid circular import w/ app object
from .commands import run as _run  # noqa: F401, E402
from .commands import codec as _codec  # noqa: F401, E402
from .commands import config as _config  # noqa: F401, E402

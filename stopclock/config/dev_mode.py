# stopclock/config/dev_mode.py
# dev_mode lookup: injected settings first, otherwise the persisted value (cached)
#
# * Lives in config/ rather than core/ because the fallback path reads the config file

from typing import Optional

import typer

# persisted dev_mode as last read from disk; None until first lookup or after a save
_persisted: Optional[bool] = None


# * True when DEBUG output (per-message clock tracing) may be enabled
def is_dev_mode_enabled(ctx: Optional[typer.Context] = None) -> bool:
    """Report whether dev mode is on.

    A Typer context wins so tests & embedders can inject settings through ctx.obj;
    without one the persisted setting is read once and cached until
    reset_dev_mode_cache() runs (SettingsManager.save calls it).
    """
    global _persisted

    from .settings import get_settings, settings_manager

    if ctx is not None:
        return get_settings(ctx).dev_mode

    if _persisted is None:
        _persisted = settings_manager.load().dev_mode
    return _persisted


def reset_dev_mode_cache() -> None:
    global _persisted
    _persisted = None

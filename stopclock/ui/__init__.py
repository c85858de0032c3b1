# stopclock/ui/__init__.py
# Terminal presentation: render loop, timer display & completion alert

from .render_loop import RenderLoop, Surface
from .timer_display import render_timer, LiveSurface
from .alerts import CompletionAlert

__all__ = [
    "RenderLoop",
    "Surface",
    "render_timer",
    "LiveSurface",
    "CompletionAlert",
]

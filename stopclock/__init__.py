# stopclock/__init__.py
# Dual-clock stopwatch & countdown engine w/ isolated & fallback timing sources

__version__ = "0.1.0"

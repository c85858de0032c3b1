# stopclock/core/__init__.py
# Pure timing core: codec, session model, state machine (no terminal I/O)

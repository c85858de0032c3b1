# stopclock/config/__init__.py
# Persisted preferences & dev mode detection

# stopclock/cli/commands/__init__.py
# CLI command modules; each registers itself on the root app at import

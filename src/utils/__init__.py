# Shared helpers (env flags, logging setup, exception hierarchy)

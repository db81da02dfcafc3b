"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks the feature packages lean on (settings,
DB pool, logging). Keep resource-specific SQL and mediation logic in the
feature package itself (e.g. `users/`).
"""

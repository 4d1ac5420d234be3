"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every feature uses (DB wiring,
settings, error rendering). Keep feature-specific SQL and business logic
in the corresponding feature package (e.g. `applications/`).
"""

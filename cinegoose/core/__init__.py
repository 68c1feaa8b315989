"""
Shared, cross-cutting code for the API.

`core/` holds the building blocks every feature uses (settings, SQL drivers,
query helpers, table definitions). Keep feature-specific SQL in the
corresponding feature package (e.g. `movies/`).
"""

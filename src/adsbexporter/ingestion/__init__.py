"""Ingestion layer.

Reads snapshot files, decodes them into models, projects them into series
assignments, and drives the poll loop that hands them to the registry.
"""

__all__: list[str] = []

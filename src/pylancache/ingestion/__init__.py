"""Ingestion layer.

Adapters that turn messages received from the dashboard server into
typed events for the state layer.
"""

__all__: list[str] = []

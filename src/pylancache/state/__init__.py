"""State/store layer.

This package owns every piece of in-memory preference state: locally set
values still waiting for server confirmation, the listeners that watch
them, and the per-session snapshots built from push updates.
"""

"""
Domain models.

Models are plain dataclasses held by the in‑memory store.  API
payloads are defined separately in ``schemas`` so that the wire
representation (camelCase field names, validation limits) stays
decoupled from storage.
"""

from .quote import Quote

__all__ = ["Quote"]

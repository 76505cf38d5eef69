"""
Pydantic schema definitions for API payloads.

Schemas are separated from the domain models in ``models`` to
decouple the API representation from storage.
"""

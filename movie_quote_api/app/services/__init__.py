"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  Services work
against injected storage objects, so handlers never touch the store
directly.
"""

"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Storage lives in ``core.store``, business rules in
``services`` and the HTTP boundary in ``api``.  Request and response
payloads are described by the Pydantic models in ``schemas``.
"""

from .main import app  # noqa: F401

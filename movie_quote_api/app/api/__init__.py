"""
API package containing the HTTP routes.

``router`` aggregates the domain routers from ``endpoints``; ``errors``
holds the exception handlers that turn service errors into responses.
"""

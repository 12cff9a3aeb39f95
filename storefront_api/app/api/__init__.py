"""
HTTP layer.

``router`` aggregates the resource routers from ``endpoints``; all
routes are mounted at the application root without a version prefix.
"""

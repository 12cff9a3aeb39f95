"""
Application package initializer.

The service is split into a few small pieces: ``core`` holds
configuration, logging, errors, middleware and the record store;
``schemas`` defines the stored record shapes; ``services`` wraps a
store per resource; ``api`` exposes the HTTP routes.
"""

from .main import create_app  # noqa: F401

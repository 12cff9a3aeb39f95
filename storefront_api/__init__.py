"""
Top‑level package for the Storefront API.

Marks ``storefront_api`` as a package so that modules within ``app``
can be imported using fully qualified names like
``storefront_api.app.main``.  All functionality lives in submodules
under ``app``.
"""

__all__ = []

"""
Service layer abstraction.

Each service wraps a ``RecordStore`` for one resource and adds the
resource specific lookups.  Handlers only talk to services, so the
in‑memory store can be swapped without touching the API layer.
"""

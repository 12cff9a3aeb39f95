"""
Pydantic schema definitions for stored records.

Each resource defines the model its store hands out.  Request bodies
are read as plain mappings so that missing fields can be reported with
the service's own status codes rather than framework validation errors.
"""

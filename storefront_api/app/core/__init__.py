"""Infrastructure shared by every resource: settings, logging, errors, storage."""

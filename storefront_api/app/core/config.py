"""
Startup configuration.

The ``Settings`` dataclass is built once at process entry (usually via
``Settings.from_env``) and handed to ``create_app`` and to the server
runner.  Nothing else in the package reads environment variables, so
tests can construct a ``Settings`` directly with whatever values they
need.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple


# Middleware names understood by ``core.middleware.install_middleware``.
KNOWN_MIDDLEWARE = ("cors", "security_headers", "request_logging")

DEFAULT_MIDDLEWARE = ("cors", "security_headers")


def parse_port(value: Optional[str]) -> Optional[int]:
    """Parse a port number, returning ``None`` for missing or garbage input."""
    if value is None or not value.strip():
        return None
    try:
        return int(value.strip())
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring non-numeric port value %r", value)
        return None


def parse_middleware(value: Optional[str]) -> Tuple[str, ...]:
    """Split a comma‑separated middleware list.

    ``None`` selects the defaults; an empty string disables all
    optional middleware.
    """
    if value is None:
        return DEFAULT_MIDDLEWARE
    return tuple(name.strip().lower() for name in value.split(",") if name.strip())


@dataclass
class Settings:
    """Application settings.

    Parameters
    ----------
    port : Optional[int]
        TCP port to listen on.  ``None`` means no port was supplied; the
        runner logs this and lets the OS pick one.
    middleware : tuple of str
        Names of optional middleware to enable, in installation order.
    data_dir : Optional[str]
        Directory holding ``users.json`` and ``products.json``.  When
        omitted, records only live in memory.
    """

    project_name: str = "Storefront API"
    api_version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: Optional[int] = None
    middleware: Tuple[str, ...] = field(default_factory=lambda: DEFAULT_MIDDLEWARE)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    data_dir: Optional[str] = None

    def __post_init__(self) -> None:
        unknown = [name for name in self.middleware if name not in KNOWN_MIDDLEWARE]
        if unknown:
            raise ValueError(
                f"Unknown middleware {', '.join(unknown)}; expected any of {', '.join(KNOWN_MIDDLEWARE)}"
            )
        self.middleware = tuple(self.middleware)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        ``environ`` defaults to ``os.environ``; pass a plain dict to
        build settings from explicit values.
        """
        env = os.environ if environ is None else environ
        return cls(
            project_name=env.get("PROJECT_NAME", "Storefront API"),
            api_version=env.get("API_VERSION", "1.0.0"),
            host=env.get("HOST", "0.0.0.0"),
            port=parse_port(env.get("PORT")),
            middleware=parse_middleware(env.get("MIDDLEWARE")),
            log_level=env.get("LOG_LEVEL", "INFO"),
            log_file=env.get("LOG_FILE") or None,
            data_dir=env.get("DATA_DIR") or None,
        )

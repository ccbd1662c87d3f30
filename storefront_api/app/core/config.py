"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
demo store runs out of the box: an in‑memory SQLite database, port
5000 and a single ``default`` cart session for clients that do not
send a session header.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Storefront API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Listen address used by ``run.py``.
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))

    # Path or connection string for the SQLite database.  The default
    # ``:memory:`` keeps all state in process memory; it is lost on
    # restart.  A relative file path is resolved against the project
    # root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", ":memory:")

    # Comma‑separated list of origins allowed by the CORS middleware.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Cart session used when a request carries no ``X-Cart-Session``
    # header.  Older clients that know nothing about sessions all share
    # this cart.
    default_cart_session: str = os.getenv("DEFAULT_CART_SESSION", "default")

    # When enabled, checkout re‑prices submitted items from the catalog
    # instead of trusting the prices sent by the client.
    verify_checkout_prices: bool = _env_flag("VERIFY_CHECKOUT_PRICES")

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()

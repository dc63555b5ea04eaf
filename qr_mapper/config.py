"""
Configuration
Reads the store connection and scanner timings from the environment.
"""

import os
from dotenv import load_dotenv
from sqlalchemy.engine import make_url

from qr_mapper.errors import ConfigurationError
from qr_mapper.scanner.extract import DEFAULT_TICKET_DOMAIN_MARKER

load_dotenv()

DEFAULT_BADGE_ACK_DELAY = 2.0
DEFAULT_SUCCESS_RESET_DELAY = 3.0
DEFAULT_SCAN_SESSION_TTL = 1800.0


def build_store_uri(store_url, store_key):
    """
    Combine the store URL and access key into a SQLAlchemy URI.
    The key is injected as the connection password; SQLite URLs take no password.
    """
    if not store_url or not store_key:
        raise ConfigurationError(
            "Missing store env vars. Set STORE_URL and STORE_KEY in .env"
        )
    url = make_url(store_url)
    if url.get_backend_name() != "sqlite":
        url = url.set(password=store_key)
    return url.render_as_string(hide_password=False)


def load_config():
    config = {
        "SQLALCHEMY_TRACK_MODIFICATIONS": False,
        "TICKET_DOMAIN_MARKER": os.environ.get("TICKET_DOMAIN_MARKER", DEFAULT_TICKET_DOMAIN_MARKER),
        "BADGE_ACK_DELAY": float(os.environ.get("BADGE_ACK_DELAY", DEFAULT_BADGE_ACK_DELAY)),
        "SUCCESS_RESET_DELAY": float(os.environ.get("SUCCESS_RESET_DELAY", DEFAULT_SUCCESS_RESET_DELAY)),
        "SCAN_SESSION_TTL": float(os.environ.get("SCAN_SESSION_TTL", DEFAULT_SCAN_SESSION_TTL)),
        "LOG_LEVEL": os.environ.get("LOG_LEVEL", "INFO"),
    }

    store_url = os.environ.get("STORE_URL")
    store_key = os.environ.get("STORE_KEY")
    if store_url and store_key:
        config["SQLALCHEMY_DATABASE_URI"] = build_store_uri(store_url, store_key)

    return config

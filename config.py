"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from urllib.parse import quote

from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "cafe")
DB_USER: str = os.getenv("DB_USER", "postgres")
DB_PASS: str = os.getenv("DB_PASS", "")

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING").upper()
LOG_FILE: str = os.getenv("LOG_FILE", "")

# ── Security ──────────────────────────────────────────────
# Empty disables the "Bypass" entry of the main menu.
DEV_LOGIN: str = os.getenv("DEV_LOGIN", "").strip()
LOGIN_MAX_ATTEMPTS: int = int(os.getenv("LOGIN_MAX_ATTEMPTS", "5"))
LOGIN_WINDOW_SECONDS: int = int(os.getenv("LOGIN_WINDOW_SECONDS", "300"))

# ── Orders ────────────────────────────────────────────────
HISTORY_LIMIT: int = int(os.getenv("HISTORY_LIMIT", "5"))
UNPAID_WINDOW_HOURS: int = int(os.getenv("UNPAID_WINDOW_HOURS", "24"))


def build_dsn(dbname: str, port, user: str, password: str = "", host: str = DB_HOST) -> str:
    """
    Build a libpq connection URL.

    Args:
        dbname: Database name.
        port: Server port (str or int).
        user: Login role.
        password: Optional password; URL-quoted when present.
        host: Server host.

    Returns:
        A ``postgresql://`` URL accepted by psycopg2.
    """
    auth = quote(user, safe="")
    if password:
        auth += ":" + quote(password, safe="")
    return f"postgresql://{auth}@{host}:{int(port)}/{quote(dbname, safe='')}"


def redact_dsn(dsn: str) -> str:
    """Return the DSN with any password replaced by ``***``."""
    scheme, _, rest = dsn.partition("://")
    auth, sep, location = rest.rpartition("@")
    if not sep or ":" not in auth:
        return dsn
    user = auth.split(":", 1)[0]
    return f"{scheme}://{user}:***@{location}"

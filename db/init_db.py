"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Users table: customers, employees and managers of the café
CREATE TABLE IF NOT EXISTS users (
    login           VARCHAR(50) PRIMARY KEY,
    phonenum        VARCHAR(16),
    password        VARCHAR(50) NOT NULL,
    favitems        TEXT,
    type            VARCHAR(8) NOT NULL
);

-- Menu table: every item that can be ordered
CREATE TABLE IF NOT EXISTS menu (
    itemname        VARCHAR(50) PRIMARY KEY,
    type            VARCHAR(20) NOT NULL,
    price           NUMERIC(8,2) NOT NULL CHECK (price >= 0),
    description     TEXT,
    imageurl        VARCHAR(256)
);

-- Orders table: one row per order, total kept in sync with its items
CREATE TABLE IF NOT EXISTS orders (
    orderid             SERIAL PRIMARY KEY,
    login               VARCHAR(50) NOT NULL REFERENCES users(login) ON UPDATE CASCADE,
    paid                BOOLEAN NOT NULL DEFAULT FALSE,
    timestamprecieved   TIMESTAMP NOT NULL DEFAULT NOW(),
    total               NUMERIC(10,2) NOT NULL DEFAULT 0
);

-- Item status table: the line items of an order and their preparation state
CREATE TABLE IF NOT EXISTS itemstatus (
    orderid         INT NOT NULL REFERENCES orders(orderid) ON DELETE CASCADE,
    itemname        VARCHAR(50) NOT NULL REFERENCES menu(itemname) ON UPDATE CASCADE,
    lastupdated     TIMESTAMP NOT NULL DEFAULT NOW(),
    status          VARCHAR(20) NOT NULL DEFAULT 'Hasn''t started',
    comments        TEXT,
    PRIMARY KEY (orderid, itemname)
);

-- Indexes for history and unpaid-order browsing
CREATE INDEX IF NOT EXISTS idx_orders_login ON orders(login);
CREATE INDEX IF NOT EXISTS idx_orders_unpaid ON orders(paid, timestamprecieved);
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        release_connection(conn)


if __name__ == "__main__":
    from config import DB_NAME, DB_PASS, DB_PORT, DB_USER, build_dsn
    from db.connection import close_pool, init_pool

    init_pool(build_dsn(DB_NAME, DB_PORT, DB_USER, DB_PASS))
    try:
        create_tables()
    finally:
        close_pool()
    print("Database schema created successfully.")

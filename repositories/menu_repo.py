"""
repositories/menu_repo.py
--------------------------
Data access layer for the café menu.
All SQL queries related to the `menu` table live here.
"""

from typing import Optional

from db.connection import get_connection, release_connection
from models.menu_item import MenuItem
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "itemname, type, price, description, imageurl"

EDITABLE_FIELDS = ("itemname", "type", "price", "description", "imageurl")


class MenuRepository:
    """Repository for CRUD operations on the menu table."""

    # ── CREATE ────────────────────────────────────────────

    def add(self, item: MenuItem) -> MenuItem:
        """Insert a new menu item."""
        sql = """
            INSERT INTO menu (itemname, type, price, description, imageurl)
            VALUES (%s, %s, %s, %s, %s);
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (item.item_name, item.type, item.price, item.description, item.image_url))
            conn.commit()
            logger.info(f"Added menu item '{item.item_name}'")
            return item
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add menu item '{item.item_name}': {e}")
            raise
        finally:
            release_connection(conn)

    # ── READ ──────────────────────────────────────────────

    def get_all(self) -> list[MenuItem]:
        """Return the whole menu grouped by type."""
        sql = f"SELECT {_COLUMNS} FROM menu ORDER BY type, itemname;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [self._row_to_item(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def find_by_name(self, name: str) -> Optional[MenuItem]:
        """Case-insensitive exact lookup by item name."""
        sql = f"SELECT {_COLUMNS} FROM menu WHERE LOWER(itemname) = LOWER(%s);"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (name,))
                row = cur.fetchone()
                return self._row_to_item(row) if row else None
        finally:
            release_connection(conn)

    def find_by_type(self, category: str) -> list[MenuItem]:
        """Case-insensitive exact lookup by item type."""
        sql = f"SELECT {_COLUMNS} FROM menu WHERE LOWER(type) = LOWER(%s) ORDER BY itemname;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (category,))
                return [self._row_to_item(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    # ── UPDATE ────────────────────────────────────────────

    def update_field(self, name: str, field: str, value) -> bool:
        """
        Update a single column of a menu item.

        Args:
            name: Item name, matched case-insensitively.
            field: One of ``EDITABLE_FIELDS``.
            value: New value.

        Returns:
            True if a row was updated, False otherwise.
        """
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Field '{field}' cannot be updated")
        sql = f"UPDATE menu SET {field} = %s WHERE LOWER(itemname) = LOWER(%s);"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (value, name))
                updated = cur.rowcount > 0
            conn.commit()
            return updated
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to update {field} of menu item '{name}': {e}")
            raise
        finally:
            release_connection(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, name: str) -> bool:
        """Delete a menu item by name (case-insensitive)."""
        sql = "DELETE FROM menu WHERE LOWER(itemname) = LOWER(%s);"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (name,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted menu item '{name}'")
            return deleted
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to delete menu item '{name}': {e}")
            raise
        finally:
            release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_item(row: tuple) -> MenuItem:
        """Convert a database row tuple to a MenuItem domain object."""
        return MenuItem(
            item_name=row[0],
            type=row[1],
            price=float(row[2]),
            description=row[3],
            image_url=row[4],
        )

"""
repositories/order_repo.py
---------------------------
Data access layer for orders and their item statuses.
All SQL queries related to the `orders` and `itemstatus` tables live here.

Every workflow that touches more than one row runs on a single connection
and commits once, so an order never ends up with a total that disagrees
with its items.
"""

from typing import Iterable, Optional

from db.connection import get_connection, release_connection
from models.order import DEFAULT_ITEM_STATUS, ItemStatus, Order
from utils.logger import get_logger

logger = get_logger(__name__)

_ORDER_COLUMNS = "orderid, login, paid, timestamprecieved, total"
_STATUS_COLUMNS = "orderid, itemname, status, lastupdated, comments"

# Canonical item names come from the menu so the foreign key always matches.
_INSERT_ITEM_SQL = """
    INSERT INTO itemstatus (orderid, itemname, lastupdated, status, comments)
    SELECT %s, itemname, NOW(), %s, ''
    FROM menu WHERE LOWER(itemname) = LOWER(%s);
"""

_REFRESH_TOTAL_SQL = """
    UPDATE orders
    SET total = (
        SELECT COALESCE(SUM(m.price), 0)
        FROM itemstatus i JOIN menu m ON m.itemname = i.itemname
        WHERE i.orderid = %s
    )
    WHERE orderid = %s
    RETURNING total;
"""


class OrderRepository:
    """Repository for orders and their line items."""

    # ── CREATE ────────────────────────────────────────────

    def create(self, login: str, item_names: Iterable[str]) -> Order:
        """
        Insert a new order with its items in one transaction.

        Args:
            login: Account placing the order.
            item_names: Menu item names; each must exist in the menu.

        Returns:
            The persisted Order with id, timestamp and total populated.

        Raises:
            ValueError: If an item vanished from the menu meanwhile.
        """
        sql = """
            INSERT INTO orders (login, paid, timestamprecieved, total)
            VALUES (%s, FALSE, NOW(), 0)
            RETURNING orderid, timestamprecieved;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (login,))
                order_id, received = cur.fetchone()
                self._insert_items(cur, order_id, item_names)
                total = self._refresh_total(cur, order_id)
            conn.commit()
            logger.info(f"Placed order #{order_id} for '{login}' (total {total:.2f})")
            return Order(login=login, paid=False, timestamp_received=received, total=total, order_id=order_id)
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to place order for '{login}': {e}")
            raise
        finally:
            release_connection(conn)

    def add_items(self, order_id: int, item_names: Iterable[str]) -> float:
        """
        Add items to an existing order and recompute its total.

        Returns:
            The new order total.
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                self._insert_items(cur, order_id, item_names)
                total = self._refresh_total(cur, order_id)
            conn.commit()
            logger.info(f"Added items to order #{order_id} (total {total:.2f})")
            return total
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add items to order #{order_id}: {e}")
            raise
        finally:
            release_connection(conn)

    # ── READ ──────────────────────────────────────────────

    def get(self, order_id: int) -> Optional[Order]:
        """Fetch a single order by ID."""
        sql = f"SELECT {_ORDER_COLUMNS} FROM orders WHERE orderid = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (order_id,))
                row = cur.fetchone()
                return self._row_to_order(row) if row else None
        finally:
            release_connection(conn)

    def get_recent_for_user(self, login: str, limit: int) -> list[Order]:
        """Most recent orders of one account, newest first."""
        sql = f"SELECT {_ORDER_COLUMNS} FROM orders WHERE login = %s ORDER BY orderid DESC LIMIT %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (login, limit))
                return [self._row_to_order(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_unpaid_since(self, hours: int) -> list[Order]:
        """Unpaid orders received within the last ``hours`` hours, oldest first."""
        sql = f"""
            SELECT {_ORDER_COLUMNS} FROM orders
            WHERE paid = FALSE AND timestamprecieved > NOW() - make_interval(hours => %s)
            ORDER BY timestamprecieved ASC, orderid ASC;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (hours,))
                return [self._row_to_order(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_items(self, order_id: int) -> list[ItemStatus]:
        """All line items of an order."""
        sql = f"SELECT {_STATUS_COLUMNS} FROM itemstatus WHERE orderid = %s ORDER BY itemname;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (order_id,))
                return [self._row_to_status(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    # ── UPDATE ────────────────────────────────────────────

    def mark_paid(self, order_id: int) -> bool:
        """Flag an order as paid."""
        sql = "UPDATE orders SET paid = TRUE WHERE orderid = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (order_id,))
                updated = cur.rowcount > 0
            conn.commit()
            if updated:
                logger.info(f"Order #{order_id} marked paid")
            return updated
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to mark order #{order_id} paid: {e}")
            raise
        finally:
            release_connection(conn)

    def update_item_status(self, order_id: int, item_name: str, status: str,
                           comments: Optional[str] = None) -> bool:
        """Set the preparation status (and comments) of one ordered item."""
        sql = """
            UPDATE itemstatus
            SET status = %s, comments = COALESCE(%s, comments), lastupdated = NOW()
            WHERE orderid = %s AND LOWER(itemname) = LOWER(%s);
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (status, comments, order_id, item_name))
                updated = cur.rowcount > 0
            conn.commit()
            return updated
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to update status of '{item_name}' in order #{order_id}: {e}")
            raise
        finally:
            release_connection(conn)

    # ── DELETE ────────────────────────────────────────────

    def remove_item(self, order_id: int, item_name: str) -> Optional[float]:
        """
        Remove one item from an order and recompute its total.

        Returns:
            The new total, or None when the item was not part of the order.
        """
        sql = "DELETE FROM itemstatus WHERE orderid = %s AND LOWER(itemname) = LOWER(%s);"
        touch_sql = "UPDATE itemstatus SET lastupdated = NOW() WHERE orderid = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (order_id, item_name))
                if cur.rowcount == 0:
                    conn.rollback()
                    return None
                cur.execute(touch_sql, (order_id,))
                total = self._refresh_total(cur, order_id)
            conn.commit()
            logger.info(f"Removed '{item_name}' from order #{order_id} (total {total:.2f})")
            return total
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to remove '{item_name}' from order #{order_id}: {e}")
            raise
        finally:
            release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _insert_items(cur, order_id: int, item_names: Iterable[str]) -> None:
        for name in item_names:
            cur.execute(_INSERT_ITEM_SQL, (order_id, DEFAULT_ITEM_STATUS, name))
            if cur.rowcount == 0:
                raise ValueError(f"no such item on the menu: {name}")

    @staticmethod
    def _refresh_total(cur, order_id: int) -> float:
        cur.execute(_REFRESH_TOTAL_SQL, (order_id, order_id))
        return float(cur.fetchone()[0])

    @staticmethod
    def _row_to_order(row: tuple) -> Order:
        """Convert a database row tuple to an Order domain object."""
        return Order(
            order_id=row[0],
            login=row[1].strip(),
            paid=bool(row[2]),
            timestamp_received=row[3],
            total=float(row[4]),
        )

    @staticmethod
    def _row_to_status(row: tuple) -> ItemStatus:
        """Convert a database row tuple to an ItemStatus domain object."""
        return ItemStatus(
            order_id=row[0],
            item_name=row[1].strip(),
            status=(row[2] or DEFAULT_ITEM_STATUS).strip(),
            last_updated=row[3],
            comments=row[4],
        )

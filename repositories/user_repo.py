"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Optional

from db.connection import get_connection, release_connection
from models.user import User
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "login, password, type, phonenum, favitems"

# Columns a profile update may touch; never built from user input.
EDITABLE_FIELDS = ("password", "favitems", "phonenum", "type")


class UserRepository:
    """Repository for CRUD operations on the users table."""

    def create(self, user: User) -> User:
        """
        Insert a new user.

        Args:
            user: The User to persist.

        Returns:
            The same User.
        """
        sql = """
            INSERT INTO users (phonenum, login, password, favitems, type)
            VALUES (%s, %s, %s, %s, %s);
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (user.phone_num, user.login, user.password, user.fav_items, user.type))
            conn.commit()
            logger.info(f"Created {user.type} account '{user.login}'")
            return user
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to create user '{user.login}': {e}")
            raise
        finally:
            release_connection(conn)

    def authenticate(self, login: str, password: str) -> Optional[User]:
        """
        Fetch the user matching both login and password.

        Returns:
            The User, or None when the credentials do not match.
        """
        sql = f"SELECT {_COLUMNS} FROM users WHERE login = %s AND password = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (login, password))
                row = cur.fetchone()
                return self._row_to_user(row) if row else None
        finally:
            release_connection(conn)

    def get_by_login(self, login: str, case_insensitive: bool = False) -> Optional[User]:
        """Fetch a user by login name."""
        if case_insensitive:
            sql = f"SELECT {_COLUMNS} FROM users WHERE LOWER(login) = LOWER(%s);"
        else:
            sql = f"SELECT {_COLUMNS} FROM users WHERE login = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (login,))
                row = cur.fetchone()
                return self._row_to_user(row) if row else None
        finally:
            release_connection(conn)

    def update_field(self, login: str, field: str, value) -> bool:
        """
        Update a single column of a user.

        Args:
            login: Exact login of the user to update.
            field: One of ``EDITABLE_FIELDS``.
            value: New value.

        Returns:
            True if a row was updated, False otherwise.

        Raises:
            ValueError: If ``field`` is not editable.
        """
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Field '{field}' cannot be updated")
        sql = f"UPDATE users SET {field} = %s WHERE login = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (value, login))
                updated = cur.rowcount > 0
            conn.commit()
            return updated
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to update {field} of '{login}': {e}")
            raise
        finally:
            release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_user(row: tuple) -> User:
        """Convert a database row tuple to a User domain object."""
        return User(
            login=row[0].strip(),
            password=row[1],
            type=row[2],
            phone_num=row[3],
            fav_items=row[4],
        )

"""
Tests for the data access layer.

A fake connection stands in for psycopg2, so these tests check:
- the parameters each query is executed with (never string-formatted)
- commit on success, rollback and re-raise on failure
- row-to-model mapping
- that order workflows run in a single transaction
"""

from datetime import datetime
from decimal import Decimal

import pytest

import repositories.menu_repo as menu_repo_module
import repositories.order_repo as order_repo_module
import repositories.user_repo as user_repo_module
from models.menu_item import MenuItem
from models.user import User
from repositories.menu_repo import MenuRepository
from repositories.order_repo import OrderRepository
from repositories.user_repo import UserRepository


# =============================================================================
# USER REPOSITORY
# =============================================================================


def test_user_create_commits_and_releases(fake_db):
    fake_db.patch(user_repo_module)
    user = User(login="carl", password="pw", type="Customer", phone_num="555", fav_items="")

    UserRepository().create(user)

    sql, params = fake_db.cur.execute.call_args[0]
    assert "INSERT INTO users" in sql
    assert params == ("555", "carl", "pw", "", "Customer")
    fake_db.conn.commit.assert_called_once()
    assert fake_db.released == [fake_db.conn]


def test_user_create_rolls_back_on_error(fake_db):
    fake_db.patch(user_repo_module)
    fake_db.cur.execute.side_effect = RuntimeError("duplicate key")

    with pytest.raises(RuntimeError):
        UserRepository().create(User(login="carl", password="pw", type="Customer"))

    fake_db.conn.rollback.assert_called_once()
    fake_db.conn.commit.assert_not_called()
    assert fake_db.released == [fake_db.conn]


def test_authenticate_maps_padded_row(fake_db):
    fake_db.patch(user_repo_module)
    fake_db.cur.fetchone.return_value = ("mia   ", "pw", "Manager ", "555", "latte")

    user = UserRepository().authenticate("mia", "pw")

    assert fake_db.cur.execute.call_args[0][1] == ("mia", "pw")
    assert user.login == "mia"
    assert user.is_manager()
    assert user.fav_items == "latte"


def test_authenticate_returns_none_without_row(fake_db):
    fake_db.patch(user_repo_module)
    fake_db.cur.fetchone.return_value = None
    assert UserRepository().authenticate("mia", "bad") is None


def test_get_by_login_case_insensitive_query(fake_db):
    fake_db.patch(user_repo_module)
    fake_db.cur.fetchone.return_value = None

    UserRepository().get_by_login("Carl", case_insensitive=True)

    sql, params = fake_db.cur.execute.call_args[0]
    assert "LOWER(login) = LOWER(%s)" in sql
    assert params == ("Carl",)


def test_user_update_field_rejects_unknown_column(fake_db):
    fake_db.patch(user_repo_module)
    with pytest.raises(ValueError):
        UserRepository().update_field("carl", "login; DROP TABLE users", "x")
    fake_db.cur.execute.assert_not_called()


def test_user_update_field_reports_rowcount(fake_db):
    fake_db.patch(user_repo_module)
    fake_db.cur.rowcount = 1

    assert UserRepository().update_field("carl", "phonenum", "777") is True
    sql, params = fake_db.cur.execute.call_args[0]
    assert sql.startswith("UPDATE users SET phonenum = %s")
    assert params == ("777", "carl")


# =============================================================================
# MENU REPOSITORY
# =============================================================================


def test_menu_get_all_converts_decimal_prices(fake_db):
    fake_db.patch(menu_repo_module)
    fake_db.cur.fetchall.return_value = [
        ("Latte", "Drinks", Decimal("3.50"), "Milky", None),
        ("Scone", "Sweets", Decimal("2.25"), None, "http://img/scone.png"),
    ]

    items = MenuRepository().get_all()

    assert items == [
        MenuItem("Latte", "Drinks", 3.5, "Milky", None),
        MenuItem("Scone", "Sweets", 2.25, None, "http://img/scone.png"),
    ]


def test_menu_find_by_type_uses_lower(fake_db):
    fake_db.patch(menu_repo_module)
    fake_db.cur.fetchall.return_value = []

    assert MenuRepository().find_by_type("drinks") == []
    sql, params = fake_db.cur.execute.call_args[0]
    assert "LOWER(type) = LOWER(%s)" in sql
    assert params == ("drinks",)


def test_menu_delete_returns_false_when_missing(fake_db):
    fake_db.patch(menu_repo_module)
    fake_db.cur.rowcount = 0

    assert MenuRepository().delete("Mocha") is False
    fake_db.conn.commit.assert_called_once()


def test_menu_update_field_whitelist(fake_db):
    fake_db.patch(menu_repo_module)
    with pytest.raises(ValueError):
        MenuRepository().update_field("Latte", "name", "Flat white")


# =============================================================================
# ORDER REPOSITORY
# =============================================================================


def test_order_create_is_one_transaction(fake_db):
    fake_db.patch(order_repo_module)
    received = datetime(2024, 5, 1, 9, 30)
    fake_db.cur.fetchone.side_effect = [(42, received), (Decimal("6.75"),)]
    fake_db.cur.rowcount = 1

    order = OrderRepository().create("carl", ["Latte", "Scone"])

    assert order.order_id == 42
    assert order.total == 6.75
    assert order.timestamp_received == received
    calls = fake_db.cur.execute.call_args_list
    assert "INSERT INTO orders" in calls[0][0][0]
    assert calls[0][0][1] == ("carl",)
    assert calls[1][0][1] == (42, "Hasn't started", "Latte")
    assert calls[2][0][1] == (42, "Hasn't started", "Scone")
    assert "SUM(m.price)" in calls[3][0][0]
    assert calls[3][0][1] == (42, 42)
    fake_db.conn.commit.assert_called_once()
    assert fake_db.released == [fake_db.conn]


def test_order_create_rolls_back_when_item_vanished(fake_db):
    fake_db.patch(order_repo_module)
    fake_db.cur.fetchone.return_value = (42, datetime(2024, 5, 1))
    fake_db.cur.rowcount = 0

    with pytest.raises(ValueError, match="no such item on the menu"):
        OrderRepository().create("carl", ["Ghost"])

    fake_db.conn.rollback.assert_called_once()
    fake_db.conn.commit.assert_not_called()


def test_add_items_is_one_transaction(fake_db):
    fake_db.patch(order_repo_module)
    fake_db.cur.fetchone.return_value = (Decimal("9.25"),)
    fake_db.cur.rowcount = 1

    assert OrderRepository().add_items(42, ["Mocha", "Scone"]) == 9.25
    calls = fake_db.cur.execute.call_args_list
    assert calls[0][0][1] == (42, "Hasn't started", "Mocha")
    assert calls[1][0][1] == (42, "Hasn't started", "Scone")
    assert "SUM(m.price)" in calls[2][0][0]
    assert calls[2][0][1] == (42, 42)
    fake_db.conn.commit.assert_called_once()
    fake_db.conn.rollback.assert_not_called()
    assert fake_db.released == [fake_db.conn]


def test_add_items_rolls_back_when_item_vanished(fake_db):
    fake_db.patch(order_repo_module)
    fake_db.cur.rowcount = 0

    with pytest.raises(ValueError, match="no such item on the menu: Ghost"):
        OrderRepository().add_items(42, ["Ghost", "Scone"])

    assert fake_db.cur.execute.call_count == 1
    fake_db.conn.rollback.assert_called_once()
    fake_db.conn.commit.assert_not_called()
    assert fake_db.released == [fake_db.conn]


def test_remove_item_absent_returns_none(fake_db):
    fake_db.patch(order_repo_module)
    fake_db.cur.rowcount = 0

    assert OrderRepository().remove_item(7, "Latte") is None
    fake_db.conn.commit.assert_not_called()
    assert fake_db.cur.execute.call_count == 1


def test_remove_item_recomputes_total(fake_db):
    fake_db.patch(order_repo_module)
    fake_db.cur.rowcount = 1
    fake_db.cur.fetchone.return_value = (Decimal("2.25"),)

    assert OrderRepository().remove_item(7, "latte") == 2.25
    statements = [c[0][0] for c in fake_db.cur.execute.call_args_list]
    assert "DELETE FROM itemstatus" in statements[0]
    assert "lastupdated = NOW()" in statements[1]
    assert "SUM(m.price)" in statements[2]
    fake_db.conn.commit.assert_called_once()


def test_get_recent_for_user_passes_limit(fake_db):
    fake_db.patch(order_repo_module)
    fake_db.cur.fetchall.return_value = [(9, "carl ", False, datetime(2024, 5, 1), Decimal("3.50"))]

    orders = OrderRepository().get_recent_for_user("carl", 5)

    assert fake_db.cur.execute.call_args[0][1] == ("carl", 5)
    assert orders[0].login == "carl"
    assert orders[0].total == 3.5
    assert orders[0].paid is False


def test_get_unpaid_since_uses_interval_parameter(fake_db):
    fake_db.patch(order_repo_module)
    fake_db.cur.fetchall.return_value = []

    OrderRepository().get_unpaid_since(24)

    sql, params = fake_db.cur.execute.call_args[0]
    assert "paid = FALSE" in sql
    assert params == (24,)


def test_update_item_status_keeps_comments_when_none(fake_db):
    fake_db.patch(order_repo_module)
    fake_db.cur.rowcount = 1

    assert OrderRepository().update_item_status(3, "Latte", "Started") is True
    sql, params = fake_db.cur.execute.call_args[0]
    assert "COALESCE(%s, comments)" in sql
    assert params == ("Started", None, 3, "Latte")

"""
Tests for the role guard, login throttling and console helpers.
"""

import pytest

from models.user import User, UserType
from security import login_limiter
from security.auth import requires_role
from utils import console


# =============================================================================
# ROLE GUARD
# =============================================================================


@requires_role(UserType.MANAGER)
def _manager_only(user, value):
    return value * 2


def test_requires_role_allows_matching_type():
    manager = User(login="mia", password="pw", type="Manager")
    assert _manager_only(manager, 21) == 42


def test_requires_role_blocks_other_types(capsys):
    customer = User(login="carl", password="pw", type="Customer")

    assert _manager_only(customer, 21) is None
    assert "not available for Customer accounts" in capsys.readouterr().out


def test_requires_role_keeps_function_name():
    assert _manager_only.__name__ == "_manager_only"


# =============================================================================
# LOGIN LIMITER
# =============================================================================


def test_login_limiter_window(monkeypatch):
    monkeypatch.setattr(login_limiter, "LOGIN_MAX_ATTEMPTS", 2)
    monkeypatch.setattr(login_limiter, "LOGIN_WINDOW_SECONDS", 60)
    clock = [1000.0]
    monkeypatch.setattr(login_limiter.time, "time", lambda: clock[0])

    login_limiter.record_failure("Carl")
    login_limiter.record_failure("carl ")
    assert login_limiter.is_locked("CARL") is True

    clock[0] += 61
    assert login_limiter.is_locked("carl") is False
    assert "carl" not in login_limiter._failed_attempts


def test_login_limiter_reset():
    for _ in range(10):
        login_limiter.record_failure("carl")
    login_limiter.reset("Carl")
    assert login_limiter.is_locked("carl") is False


# =============================================================================
# CONSOLE
# =============================================================================


def test_read_choice_retries_until_integer(feed_input, capsys):
    feed_input("abc", "", "7")
    assert console.read_choice() == 7
    assert capsys.readouterr().out.count("Your input is invalid!") == 2


def test_read_yes_no(feed_input, capsys):
    feed_input("maybe", "YES")
    assert console.read_yes_no("More? ") is True
    assert "Invalid input" in capsys.readouterr().out

    feed_input(" n ")
    assert console.read_yes_no("More? ") is False


def test_read_float_and_int(feed_input):
    feed_input("x", "2.5")
    assert console.read_float("Price: ") == 2.5
    feed_input("1.5", "3")
    assert console.read_int("Order: ") == 3


def test_read_line_propagates_eof(feed_input):
    feed_input()
    with pytest.raises(EOFError):
        console.read_line("> ")


def test_print_table(capsys):
    assert console.print_table([], ["A"]) == 0
    assert "No results." in capsys.readouterr().out

    assert console.print_table([["Latte", "3.50"], ["Scone", "2.25"]], ["Item", "Price"]) == 2
    out = capsys.readouterr().out
    assert "Item" in out and "Latte" in out and "2.25" in out


def test_print_menu(capsys):
    console.print_menu("MAIN MENU", [(1, "Create user"), (9, "< EXIT")])
    assert capsys.readouterr().out == "MAIN MENU\n---------\n1. Create user\n9. < EXIT\n"


def test_login_limiter_check_does_not_store_unknown_names():
    assert login_limiter.is_locked("nobody") is False
    assert "nobody" not in login_limiter._failed_attempts

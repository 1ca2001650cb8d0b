"""
main.py
-------
Entry point for the café ordering console.

Responsibilities:
    - Parse the command line and open the single database connection.
    - Run the main menu (create user / log in) and the per-role menus.
    - Contain failures of any menu action so the session keeps going.
    - Close the connection on exit, EOF or Ctrl-C.
"""

import argparse
import sys

import psycopg2

from config import DB_HOST, DB_PASS, DEV_LOGIN, build_dsn, redact_dsn
from db.connection import close_pool, init_pool
from db.init_db import create_tables
from handlers.account_handler import bypass, create_user, log_in
from handlers.menu_handler import modify_menu, search_item_category, search_item_name, view_menu
from handlers.order_handler import browse_orders, modify_order, place_order, update_order_status
from handlers.profile_handler import update_profile
from models.user import User, UserType
from utils.console import GREETING, print_menu, read_choice
from utils.logger import get_logger

logger = get_logger(__name__)

# Role menus: (number, label, handler)
ROLE_MENUS = {
    UserType.CUSTOMER: [
        (1, "View menu", view_menu),
        (2, "Item search", search_item_name),
        (3, "Search for item category", search_item_category),
        (4, "Update Information", update_profile),
        (5, "Modify order", modify_order),
        (6, "Add order", place_order),
        (7, "Browse Order History", browse_orders),
    ],
    UserType.EMPLOYEE: [
        (1, "View Menu", view_menu),
        (2, "Item search", search_item_name),
        (3, "Search for item category", search_item_category),
        (4, "Update Information", update_profile),
        (5, "Add Order", place_order),
        (6, "Browse unpaid orders", browse_orders),
        (7, "Update order status", update_order_status),
    ],
    UserType.MANAGER: [
        (1, "View Menu", view_menu),
        (2, "Item Search", search_item_name),
        (3, "Search for item category", search_item_category),
        (4, "Update User's Information", update_profile),
        (5, "Add Order", place_order),
        (6, "Modify menu", modify_menu),
        (7, "Browse unpaid orders", browse_orders),
        (8, "Update order status", update_order_status),
    ],
}


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cafe",
        description="Café ordering console. The password is read from DB_PASS.",
    )
    parser.add_argument("dbname", help="PostgreSQL database name")
    parser.add_argument("port", type=int, help="PostgreSQL port")
    parser.add_argument("user", help="PostgreSQL user")
    parser.add_argument("--host", default=DB_HOST, help=f"PostgreSQL host (default: {DB_HOST})")
    parser.add_argument("--init-schema", action="store_true", help="create missing tables before starting")
    return parser.parse_args(argv)


def run_action(action, *args):
    """
    Run one menu action, printing any failure and returning to the menu.
    EOFError and KeyboardInterrupt end the session instead.
    """
    try:
        return action(*args)
    except EOFError:
        raise
    except (psycopg2.Error, ValueError) as e:
        logger.error(f"{action.__name__} failed: {e}")
        print(f"Error: {str(e).strip()}")
    except Exception as e:
        logger.exception(f"Unexpected failure in {action.__name__}")
        print(f"Error: {e}")
    return None


def role_menu_loop(user: User) -> None:
    """Show the menu of the user's role until they log out."""
    while True:
        # Re-read each round: a manager may have changed their own type.
        entries = ROLE_MENUS[user.type]
        print_menu("MAIN MENU", [(n, label) for n, label, _ in entries])
        print(".........................")
        print("9. Log Out")
        choice = read_choice()
        if choice == 9:
            logger.info(f"{user} logged out")
            return
        action = {n: handler for n, _, handler in entries}.get(choice)
        if action is None:
            print("Error: invalid choice!")
            continue
        run_action(action, user)


def main_menu_loop() -> None:
    while True:
        options = [(1, "Create user"), (2, "Log in")]
        if DEV_LOGIN:
            options.append((3, "Bypass"))
        options.append((9, "< EXIT"))
        print_menu("MAIN MENU", options)

        user = None
        choice = read_choice()
        if choice == 1:
            run_action(create_user)
        elif choice == 2:
            user = run_action(log_in)
        elif choice == 3 and DEV_LOGIN:
            user = run_action(bypass)
        elif choice == 9:
            return
        else:
            print("Unrecognized choice!")

        if user is not None:
            role_menu_loop(user)


def main(argv=None) -> int:
    """Connect, run the menus, and always disconnect."""
    args = parse_args(argv)
    print(GREETING)

    dsn = build_dsn(args.dbname, args.port, args.user, DB_PASS, args.host)
    print("Connecting to database...", end="")
    print(f"Connection URL: {redact_dsn(dsn)}\n")
    try:
        init_pool(dsn)
        if args.init_schema:
            create_tables()
    except psycopg2.Error as e:
        print(f"Error - Unable to Connect to Database: {e}", file=sys.stderr)
        print("Make sure you started postgres on this machine", file=sys.stderr)
        close_pool()
        return 1
    print("Done")

    try:
        main_menu_loop()
    except (EOFError, KeyboardInterrupt):
        print()
    finally:
        print("Disconnecting from database...", end="")
        close_pool()
        print("Done\n\nBye !")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
handlers/order_handler.py
--------------------------
Order-related menu actions: placing, modifying, browsing and settling orders.
Delegates all logic to OrderService.
"""

from models.order import ITEM_STATUS_HEADERS, ITEM_STATUSES, ORDER_HEADERS
from models.user import User, UserType
from security.auth import requires_role
from services.order_service import OrderService
from utils.console import print_menu, print_table, read_choice, read_int, read_line, read_yes_no

order_service = OrderService()


def _build_cart() -> list[str]:
    """
    Ask for items one at a time, printing the running total,
    until the user does not want to add more.
    """
    cart: list[str] = []
    total = 0.0
    while True:
        name = read_line("What would you like to order: ")
        item = order_service.price_item(name)
        if item is None:
            print("no such item on the menu")
        elif item.item_name.lower() in (n.lower() for n in cart):
            print(f"'{item.item_name}' is already in your order.")
        else:
            cart.append(item.item_name)
            total += item.price
            print(f"Added {item.item_name} ({item.price:.2f}). Total: {total:.2f}")
        if not read_yes_no("Would you like to add to your order? "):
            return cart


def place_order(user: User) -> None:
    print(order_service.place_order(user, _build_cart()))


@requires_role(UserType.CUSTOMER)
def modify_order(user: User) -> None:
    """Add or remove items of one of the customer's unpaid orders."""
    order_id = read_int("Which order would you like to update? ")
    order = order_service.get_modifiable_order(user, order_id)
    if order is None:
        print("Order ID does not exist or is not yours")
        return
    _print_items(order_service.get_order_items(user, order_id))

    while True:
        print_menu(f"MODIFY ORDER #{order_id}", [(1, "Add to order"), (2, "Delete an item in the order"), (9, "Exit Update Order")])
        choice = read_choice()
        if choice == 1:
            print(order_service.add_to_order(user, order_id, _build_cart()))
        elif choice == 2:
            name = read_line("Which item would you like to delete? ")
            print(order_service.remove_from_order(user, order_id, name))
        elif choice == 9:
            return
        else:
            print("Unrecognized choice!")


def browse_orders(user: User) -> None:
    """Customer order history, or recent unpaid orders for staff."""
    orders = order_service.browse_history(user)
    print_table([o.as_row() for o in orders], ORDER_HEADERS)
    if not orders:
        return

    raw = read_line("Order id to see its items (blank to skip): ")
    if not raw:
        return
    try:
        order_id = int(raw)
    except ValueError:
        print("Your input is invalid!")
        return
    items = order_service.get_order_items(user, order_id)
    if items is None:
        print("Order ID does not exist or is not yours")
    else:
        _print_items(items)


@requires_role(UserType.EMPLOYEE, UserType.MANAGER)
def update_order_status(user: User) -> None:
    while True:
        print_menu("UPDATE ORDER STATUS", [(1, "Mark order paid"), (2, "Update item status"), (9, "Exit")])
        choice = read_choice()
        if choice == 1:
            order_id = read_int("Order ID: ")
            print(order_service.mark_paid(user, order_id))
        elif choice == 2:
            _update_item_status(user)
        elif choice == 9:
            return
        else:
            print("Unrecognized choice!")


def _update_item_status(user: User) -> None:
    order_id = read_int("Order ID: ")
    items = order_service.get_order_items(user, order_id)
    if not items:
        print(f"Order #{order_id} has no items.")
        return
    _print_items(items)
    name = read_line("Item: ")

    statuses = list(enumerate(ITEM_STATUSES, start=1))
    print_menu("New status", statuses)
    choice = read_choice()
    if choice not in dict(statuses):
        print("Unrecognized choice!")
        return
    comments = read_line("Comments (blank to keep): ")
    print(order_service.update_item_status(user, order_id, name, dict(statuses)[choice], comments))


def _print_items(items) -> None:
    print_table([i.as_row() for i in items or []], ITEM_STATUS_HEADERS)

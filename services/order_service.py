"""
services/order_service.py
--------------------------
Business logic for placing, changing and settling orders.
Orchestrates between the menu and the OrderRepository.
"""

from typing import Iterable, Optional

from config import HISTORY_LIMIT, UNPAID_WINDOW_HOURS
from models.menu_item import MenuItem
from models.order import ItemStatus, Order, normalize_item_status
from models.user import User
from repositories.menu_repo import MenuRepository
from repositories.order_repo import OrderRepository
from utils.logger import get_logger

logger = get_logger(__name__)


def _unique(item_names: Iterable[str]) -> list[str]:
    """Drop blanks and case-insensitive repeats, keeping first-seen order."""
    seen, result = set(), []
    for name in item_names:
        name = name.strip()
        if name and name.lower() not in seen:
            seen.add(name.lower())
            result.append(name)
    return result


class OrderService:
    """
    Handles all business logic related to orders.

    Workflow:
        1. The handler builds a cart of item names, pricing each via ``price_item``.
        2. ``place_order`` persists the order and all items in one transaction.
        3. Customers may change their unpaid orders; staff settle them.
    """

    def __init__(self):
        self.repo = OrderRepository()
        self.menu_repo = MenuRepository()

    def price_item(self, name: str) -> Optional[MenuItem]:
        return self.menu_repo.find_by_name(name.strip())

    def place_order(self, user: User, item_names: Iterable[str]) -> str:
        """Create an order for ``user`` holding each named item once."""
        names = _unique(item_names)
        if not names:
            return "No items ordered."
        order = self.repo.create(user.login, names)
        return f"Order #{order.order_id} placed. Total: {order.total:.2f}"

    def get_modifiable_order(self, user: User, order_id: int) -> Optional[Order]:
        """Return the order only if it is an unpaid order of ``user``."""
        order = self.repo.get(order_id)
        if order is None or order.paid or order.login != user.login:
            return None
        return order

    def add_to_order(self, user: User, order_id: int, item_names: Iterable[str]) -> str:
        if self.get_modifiable_order(user, order_id) is None:
            return "Order ID does not exist or is not yours"

        existing = {i.item_name.lower() for i in self.repo.get_items(order_id)}
        names, skipped = [], []
        for name in _unique(item_names):
            (skipped if name.lower() in existing else names).append(name)

        lines = [f"'{name}' is already in this order." for name in skipped]
        if names:
            total = self.repo.add_items(order_id, names)
            lines.append(f"Order #{order_id} updated. Total: {total:.2f}")
        elif not skipped:
            lines.append("No items added.")
        return "\n".join(lines)

    def remove_from_order(self, user: User, order_id: int, item_name: str) -> str:
        if self.get_modifiable_order(user, order_id) is None:
            return "Order ID does not exist or is not yours"
        total = self.repo.remove_item(order_id, item_name.strip())
        if total is None:
            return "Item does not exist in your order"
        return f"Item removed. New total: {total:.2f}"

    def browse_history(self, user: User) -> list[Order]:
        """
        Customers get their most recent orders; staff get the recent unpaid ones.
        """
        if user.is_customer():
            return self.repo.get_recent_for_user(user.login, HISTORY_LIMIT)
        return self.repo.get_unpaid_since(UNPAID_WINDOW_HOURS)

    def get_order_items(self, user: User, order_id: int) -> Optional[list[ItemStatus]]:
        """Items of an order, or None if it does not exist or is someone else's."""
        order = self.repo.get(order_id)
        if order is None or (user.is_customer() and order.login != user.login):
            return None
        return self.repo.get_items(order_id)

    def mark_paid(self, user: User, order_id: int) -> str:
        if not user.is_staff():
            return "Only employees and managers can settle orders."
        order = self.repo.get(order_id)
        if order is None:
            return f"Order #{order_id} does not exist."
        if order.paid:
            return f"Order #{order_id} is already paid."
        self.repo.mark_paid(order_id)
        logger.info(f"{user} settled order #{order_id}")
        return f"Order #{order_id} changed to paid"

    def update_item_status(self, user: User, order_id: int, item_name: str,
                           status: str, comments: Optional[str] = None) -> str:
        """
        Record the preparation progress of one item.

        Raises:
            ValueError: If ``status`` is not a known item status.
        """
        if not user.is_staff():
            return "Only employees and managers can update item status."
        status = normalize_item_status(status)
        comments = comments.strip() if comments and comments.strip() else None
        if self.repo.update_item_status(order_id, item_name.strip(), status, comments):
            return f"'{item_name.strip()}' in order #{order_id} is now '{status}'."
        return "Item does not exist in that order"

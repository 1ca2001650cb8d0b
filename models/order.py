"""
models/order.py
---------------
Domain models for orders and the status of each ordered item.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

ITEM_STATUSES = ("Hasn't started", "Started", "Finished")
DEFAULT_ITEM_STATUS = ITEM_STATUSES[0]


def normalize_item_status(raw: str) -> str:
    """
    Match a status case-insensitively against ``ITEM_STATUSES``.

    Raises:
        ValueError: If the status is not recognised.
    """
    value = (raw or "").strip().lower()
    for status in ITEM_STATUSES:
        if status.lower() == value:
            return status
    raise ValueError(f"Unknown item status: {raw!r}")


@dataclass
class Order:
    """
    Represents a customer order.

    Attributes:
        login: Account the order belongs to.
        paid: Whether staff has marked it paid.
        timestamp_received: When the order was placed.
        total: Sum of the menu prices of its items.
        order_id: Database primary key (None for new records).
    """
    login: str
    paid: bool = False
    timestamp_received: Optional[datetime] = None
    total: float = 0.0
    order_id: Optional[int] = None

    def as_row(self) -> list:
        received = self.timestamp_received.strftime("%Y-%m-%d %H:%M") if self.timestamp_received else ""
        return [self.order_id, self.login, "yes" if self.paid else "no", received, f"{self.total:.2f}"]

    def __str__(self) -> str:
        state = "paid" if self.paid else "unpaid"
        return f"#{self.order_id} {self.login} {self.total:.2f} ({state})"


@dataclass
class ItemStatus:
    """One ordered item and its preparation state."""
    order_id: int
    item_name: str
    status: str = DEFAULT_ITEM_STATUS
    last_updated: Optional[datetime] = None
    comments: Optional[str] = None

    def as_row(self) -> list:
        updated = self.last_updated.strftime("%Y-%m-%d %H:%M") if self.last_updated else ""
        return [self.item_name, self.status, updated, self.comments or ""]


ORDER_HEADERS = ["Order", "Login", "Paid", "Received", "Total"]
ITEM_STATUS_HEADERS = ["Item", "Status", "Last updated", "Comments"]

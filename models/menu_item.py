"""
models/menu_item.py
-------------------
Domain model for items on the café menu.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class MenuItem:
    """
    Represents a single orderable item.

    Attributes:
        item_name: Unique item name (primary key).
        type: Category, e.g. 'Drinks' or 'Sweets'.
        price: Unit price.
        description: Optional human-readable description.
        image_url: Optional picture link.
    """
    item_name: str
    type: str
    price: float
    description: Optional[str] = None
    image_url: Optional[str] = None

    def as_row(self) -> list:
        return [self.item_name, self.type, f"{self.price:.2f}", self.description or "", self.image_url or ""]

    def __str__(self) -> str:
        return f"{self.item_name} | {self.type} | {self.price:.2f}"


MENU_HEADERS = ["Item", "Type", "Price", "Description", "Image URL"]

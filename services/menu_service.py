"""
services/menu_service.py
-------------------------
Business logic for browsing and maintaining the menu.
"""

import math
from typing import Optional

from models.menu_item import MenuItem
from repositories.menu_repo import MenuRepository
from utils.logger import get_logger

logger = get_logger(__name__)

# Logical field name -> menu column
MENU_FIELDS = {
    "name": "itemname",
    "type": "type",
    "price": "price",
    "description": "description",
    "image_url": "imageurl",
}


def parse_price(raw) -> float:
    """
    Parse a non-negative price.

    Raises:
        ValueError: If the value is not a finite number or is negative.
    """
    price = float(raw)
    if not math.isfinite(price):
        raise ValueError("price must be a finite number")
    if price < 0:
        raise ValueError("price cannot be negative")
    return round(price, 2)


class MenuService:
    """Menu lookups for everyone, menu edits for managers."""

    def __init__(self):
        self.repo = MenuRepository()

    def get_menu(self) -> list[MenuItem]:
        return self.repo.get_all()

    def search_by_name(self, name: str) -> Optional[MenuItem]:
        return self.repo.find_by_name(name.strip())

    def search_by_category(self, category: str) -> list[MenuItem]:
        return self.repo.find_by_type(category.strip())

    def add_item(self, name: str, item_type: str, price, description: str = "",
                 image_url: str = "") -> str:
        """
        Add an item to the menu.

        Raises:
            ValueError: On a blank name/type or an invalid price.
        """
        name, item_type = name.strip(), item_type.strip()
        if not name or not item_type:
            raise ValueError("item name and type are required")

        if self.repo.find_by_name(name):
            return f"Item '{name}' is already on the menu."

        item = MenuItem(
            item_name=name,
            type=item_type,
            price=parse_price(price),
            description=description.strip() or None,
            image_url=image_url.strip() or None,
        )
        self.repo.add(item)
        return "Item successfully added!"

    def delete_item(self, name: str) -> str:
        if self.repo.delete(name.strip()):
            return "Item successfully deleted"
        return "Item is not in the menu."

    def modify_item(self, name: str, field: str, new_value: str) -> str:
        """
        Change one attribute of a menu item.

        Args:
            name: Item to modify (case-insensitive).
            field: One of ``MENU_FIELDS``.
            new_value: Raw text typed by the manager.
        """
        if field not in MENU_FIELDS:
            raise ValueError(f"Not an option to modify: {field}")

        value = new_value.strip()
        if field == "price":
            value = parse_price(value)
        elif field in ("name", "type") and not value:
            raise ValueError(f"{field} cannot be empty")
        elif not value:
            value = None

        if self.repo.update_field(name.strip(), MENU_FIELDS[field], value):
            logger.info(f"Menu item '{name}' {field} changed")
            return "Item successfully updated"
        return "Item is not in the menu."

"""
models/user.py
--------------
Domain model for café accounts and their roles.
"""

from dataclasses import dataclass
from typing import Optional


class UserType:
    """Account roles as stored in ``users.type``."""
    CUSTOMER = "Customer"
    EMPLOYEE = "Employee"
    MANAGER = "Manager"

    ALL = (CUSTOMER, EMPLOYEE, MANAGER)


def normalize_user_type(raw: str) -> str:
    """
    Map a stored or typed role to its canonical spelling.

    Fixed-width columns pad values (``"Manager "``), and people type
    ``manager``; both map to ``UserType.MANAGER``.

    Raises:
        ValueError: If the value is not a known role.
    """
    value = (raw or "").strip().lower()
    for user_type in UserType.ALL:
        if user_type.lower() == value:
            return user_type
    raise ValueError(f"Unknown user type: {raw!r}")


@dataclass
class User:
    """
    Represents a row of the users table.

    Attributes:
        login: Unique login name (primary key).
        password: Login password.
        type: One of ``UserType.ALL``.
        phone_num: Optional phone number.
        fav_items: Free-text list of favourite menu items.
    """
    login: str
    password: str
    type: str
    phone_num: Optional[str] = None
    fav_items: Optional[str] = None

    def __post_init__(self) -> None:
        self.type = normalize_user_type(self.type)

    def is_customer(self) -> bool:
        return self.type == UserType.CUSTOMER

    def is_employee(self) -> bool:
        return self.type == UserType.EMPLOYEE

    def is_manager(self) -> bool:
        return self.type == UserType.MANAGER

    def is_staff(self) -> bool:
        """Employees and managers handle payments and item statuses."""
        return self.is_employee() or self.is_manager()

    def __str__(self) -> str:
        return f"{self.login} ({self.type})"

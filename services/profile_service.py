"""
services/profile_service.py
----------------------------
Business logic for editing account details.
Everyone edits their own profile; managers can edit anyone's, including the role.
"""

from typing import Optional

from models.user import User, normalize_user_type
from repositories.user_repo import UserRepository
from utils.logger import get_logger

logger = get_logger(__name__)

# Logical field name -> users column
PROFILE_FIELDS = {
    "password": "password",
    "fav_items": "favitems",
    "phone_num": "phonenum",
}
MANAGER_FIELDS = {**PROFILE_FIELDS, "type": "type"}

_LABELS = {
    "password": "Password",
    "fav_items": "Favorite items",
    "phone_num": "Phone number",
    "type": "User type",
}


class ProfileService:
    """Updates rows of the users table on behalf of a logged-in user."""

    def __init__(self):
        self.repo = UserRepository()

    def update_own(self, user: User, field: str, value: str) -> str:
        """Change one of the caller's own profile fields."""
        if field not in PROFILE_FIELDS:
            raise ValueError(f"Not an option to modify: {field}")
        value = self._clean(field, value)
        if not self.repo.update_field(user.login, PROFILE_FIELDS[field], value):
            return "Profile not found."
        self._apply(user, field, value)
        logger.info(f"{user} updated own {field}")
        return f"{_LABELS[field]} updated."

    def find_user(self, login: str) -> Optional[User]:
        return self.repo.get_by_login(login.strip(), case_insensitive=True)

    def update_other(self, manager: User, target_login: str, field: str, value: str) -> str:
        """
        Change a field of another account. Managers only.

        Raises:
            ValueError: On an unknown field or user type.
        """
        if not manager.is_manager():
            logger.warning(f"{manager} tried to edit '{target_login}'")
            return "Only managers can update other users."
        if field not in MANAGER_FIELDS:
            raise ValueError(f"Not an option to modify: {field}")

        target = self.find_user(target_login)
        if target is None:
            return "Invalid Profile"

        value = self._clean(field, value)
        self.repo.update_field(target.login, MANAGER_FIELDS[field], value)
        if target.login == manager.login:
            self._apply(manager, field, value)
        logger.info(f"{manager} updated {field} of '{target.login}'")
        return f"{_LABELS[field]} of '{target.login}' updated."

    @staticmethod
    def _clean(field: str, value: str):
        value = value.strip()
        if field == "password" and not value:
            raise ValueError("password cannot be empty")
        if field == "type":
            return normalize_user_type(value)
        return value

    @staticmethod
    def _apply(user: User, field: str, value) -> None:
        setattr(user, field, value)

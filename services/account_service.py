"""
services/account_service.py
----------------------------
Business logic for creating accounts and logging in.
"""

from typing import Optional

from config import DEV_LOGIN
from models.user import User, UserType
from repositories.user_repo import UserRepository
from security import login_limiter
from utils.logger import get_logger

logger = get_logger(__name__)


class AccountService:
    """
    Handles registration and authentication.

    New accounts are always customers; only a manager can promote them.
    """

    def __init__(self):
        self.repo = UserRepository()

    def create_user(self, login: str, password: str, phone: str) -> str:
        """
        Register a new customer account.

        Raises:
            ValueError: If login or password is blank.
        """
        login = login.strip()
        if not login or not password:
            raise ValueError("login and password are required")

        if self.repo.get_by_login(login, case_insensitive=True):
            return f"User '{login}' already exists."

        user = User(login=login, password=password, type=UserType.CUSTOMER,
                    phone_num=phone.strip() or None, fav_items="")
        self.repo.create(user)
        return "User successfully created!"

    def log_in(self, login: str, password: str) -> dict:
        """
        Check credentials.

        Returns:
            Dict with 'success' and either 'user' or 'message'.
        """
        login = login.strip()
        if login_limiter.is_locked(login):
            return {"success": False, "message": "Too many failed attempts. Try again later."}

        user = self.repo.authenticate(login, password)
        if user is None:
            login_limiter.record_failure(login)
            logger.info(f"Failed login for '{login}'")
            return {"success": False, "message": "Invalid login or password."}

        login_limiter.reset(login)
        logger.info(f"{user} logged in")
        return {"success": True, "user": user}

    def bypass(self) -> Optional[User]:
        """Log in as ``DEV_LOGIN`` without a password (development only)."""
        if not DEV_LOGIN:
            return None
        user = self.repo.get_by_login(DEV_LOGIN)
        if user:
            logger.warning(f"Bypass login used for {user}")
        return user

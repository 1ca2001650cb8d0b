"""
handlers/account_handler.py
----------------------------
Main-menu actions: create an account, log in, bypass.
"""

from typing import Optional

from models.user import User
from services.account_service import AccountService
from utils.console import read_line

account_service = AccountService()


def create_user() -> None:
    """Prompt for login, password and phone and register a customer."""
    login = read_line("\tEnter user login: ")
    password = read_line("\tEnter user password: ")
    phone = read_line("\tEnter user phone: ")
    print(account_service.create_user(login, password, phone))


def log_in() -> Optional[User]:
    """Prompt for credentials. Returns the authorised User or None."""
    login = read_line("\tEnter user login: ")
    password = read_line("\tEnter user password: ")
    result = account_service.log_in(login, password)
    if not result["success"]:
        print(result["message"])
        return None
    return result["user"]


def bypass() -> Optional[User]:
    user = account_service.bypass()
    if user is None:
        print("Bypass is not available.")
    return user

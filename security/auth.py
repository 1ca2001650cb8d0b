"""
security/auth.py
-----------------
Role guard for console handlers.
Blocks any account whose type is not allowed to run a menu action.
"""

from functools import wraps
from typing import Callable

from models.user import User
from utils.logger import get_logger

logger = get_logger(__name__)


def requires_role(*user_types: str):
    """
    Decorator that restricts a handler to the given account types.

    Usage:
        @requires_role(UserType.MANAGER)
        def modify_menu(user):
            ...

    Behavior:
        - The handler's first argument must be the logged-in User.
        - Other roles get an error line and the handler is skipped.
        - Denied attempts are logged.
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(user: User, *args, **kwargs):
            if user.type not in user_types:
                logger.warning(f"Denied {func.__name__} to {user.login} ({user.type})")
                print(f"Error: this action is not available for {user.type} accounts.")
                return None
            return func(user, *args, **kwargs)

        return wrapper

    return decorator

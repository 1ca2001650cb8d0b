"""
security/login_limiter.py
--------------------------
Throttles password guessing.
Limits the number of failed logins for one login name within a time window.
"""

import time
from collections import defaultdict

from config import LOGIN_MAX_ATTEMPTS, LOGIN_WINDOW_SECONDS
from utils.logger import get_logger

logger = get_logger(__name__)

# In-memory storage for failures: {login: [timestamp1, timestamp2, ...]}
_failed_attempts: dict[str, list[float]] = defaultdict(list)


def _key(login: str) -> str:
    return login.strip().lower()


def _cleanup(login: str) -> None:
    """Remove expired timestamps for a login."""
    cutoff = time.time() - LOGIN_WINDOW_SECONDS
    key = _key(login)
    recent = [t for t in _failed_attempts.get(key, []) if t > cutoff]
    if recent:
        _failed_attempts[key] = recent
    else:
        _failed_attempts.pop(key, None)


def is_locked(login: str) -> bool:
    """
    Check whether a login name has used up its failed attempts.

    Configuration (via .env):
        LOGIN_MAX_ATTEMPTS: Failures allowed per window (default: 5).
        LOGIN_WINDOW_SECONDS: Window duration in seconds (default: 300).
    """
    _cleanup(login)
    locked = len(_failed_attempts.get(_key(login), [])) >= LOGIN_MAX_ATTEMPTS
    if locked:
        logger.warning(f"Login throttled for '{login}'")
    return locked


def record_failure(login: str) -> None:
    """Remember one failed login for this name."""
    _failed_attempts[_key(login)].append(time.time())


def reset(login: str) -> None:
    """Forget the failures of a login after it succeeds."""
    _failed_attempts.pop(_key(login), None)

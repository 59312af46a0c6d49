"""
Credential lookup for the users configured in the environment.
"""

import secrets

from core.config import USERS


class Credentials:
    """Username -> password lookup; usernames are case-insensitive."""

    def __init__(self, users: dict[str, str]):
        self._users = {name.lower(): password for name, password in users.items()}

    def lookup(self, username: str) -> str | None:
        """Stored password for a user, or None if the user is unknown."""
        return self._users.get(username.strip().lower())

    def verify(self, username: str, password: str) -> bool:
        """Check a login attempt."""
        stored = self.lookup(username)
        if stored is None:
            return False
        # Constant-time comparison to prevent timing attacks
        return secrets.compare_digest(stored.encode(), password.encode())


_credentials: Credentials | None = None


def get_credentials() -> Credentials:
    """Get or create the process-wide credentials (lazy initialization)."""
    global _credentials
    if _credentials is None:
        _credentials = Credentials(USERS)
    return _credentials

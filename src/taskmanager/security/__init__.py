"""Security – password hashing."""
from taskmanager.security.passwords import PasswordHasher

__all__ = ["PasswordHasher"]

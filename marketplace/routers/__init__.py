"""
API routers
"""
from . import messages, listings, users, health

__all__ = ["messages", "listings", "users", "health"]

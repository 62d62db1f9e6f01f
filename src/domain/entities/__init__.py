"""
Auth Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

from .user import User
from .revoked_token import RevokedToken

__all__ = [
    "User",
    "RevokedToken",
]

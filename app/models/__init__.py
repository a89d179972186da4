"""Database models"""
from app.models.user import User
from app.models.weight import Weight

__all__ = ["User", "Weight"]

"""Database models"""

from catalog.models.role import Role, RoleName, user_roles
from catalog.models.user import User
from catalog.models.security import RefreshToken
from catalog.models.product import Product

__all__ = ["Role", "RoleName", "user_roles", "User", "RefreshToken", "Product"]

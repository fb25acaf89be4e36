"""Role model and role name enumeration"""

import enum

from sqlalchemy import Column, Integer, String, Table, ForeignKey

from catalog.core.database import Base


class RoleName(str, enum.Enum):
    """Closed set of roles a user can hold"""
    USER = "ROLE_USER"
    ADMIN = "ROLE_ADMIN"


# Role membership join set; neither side holds a back-reference.
user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base):
    """Static role reference data, seeded at startup"""

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(20), unique=True, nullable=False)

    def __repr__(self):
        return f"<Role(id={self.id}, name='{self.name}')>"

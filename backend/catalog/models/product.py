"""Product model"""

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from catalog.core.database import Base


class Product(Base):
    """Catalog product"""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}')>"

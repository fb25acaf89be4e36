"""Product service - catalog product persistence"""

from sqlalchemy.orm import Session
from typing import List
from catalog.models.product import Product
from catalog.schemas.product import ProductCreate, ProductUpdate
from catalog.core.exceptions import ResourceNotFoundError
import logging

logger = logging.getLogger(__name__)


class ProductService:
    """Service for product management"""

    @staticmethod
    def list_products(db: Session) -> List[Product]:
        return db.query(Product).order_by(Product.id).all()

    @staticmethod
    def get_product(db: Session, product_id: int) -> Product:
        product = db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise ResourceNotFoundError("Product")
        return product

    @staticmethod
    def create_product(db: Session, data: ProductCreate) -> Product:
        product = Product(name=data.name, description=data.description)
        db.add(product)
        db.commit()
        db.refresh(product)
        logger.info(f"Created product: {product.id} ({product.name})")
        return product

    @staticmethod
    def update_product(db: Session, product_id: int, data: ProductUpdate) -> Product:
        product = ProductService.get_product(db, product_id)
        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(product, field, value)
        db.commit()
        db.refresh(product)
        logger.info(f"Updated product: {product.id}")
        return product

    @staticmethod
    def delete_product(db: Session, product_id: int) -> None:
        product = ProductService.get_product(db, product_id)
        db.delete(product)
        db.commit()
        logger.info(f"Deleted product: {product_id}")


# Singleton instance
product_service = ProductService()

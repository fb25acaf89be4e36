"""Product routes - reads for any signed-in user, mutations for admins"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from catalog.core.database import get_db
from catalog.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from catalog.schemas.response import APIResponse
from catalog.schemas.user import Identity
from catalog.services.product_service import product_service
from catalog.api.deps import get_current_identity, get_current_admin

router = APIRouter()


@router.get("", response_model=List[ProductResponse])
def list_products(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """List all products"""
    return product_service.list_products(db)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Get a single product by ID"""
    return product_service.get_product(db, product_id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    data: ProductCreate,
    admin: Identity = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Create a new product (ADMIN only)"""
    return product_service.create_product(db, data)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    data: ProductUpdate,
    admin: Identity = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Update an existing product (ADMIN only)"""
    return product_service.update_product(db, product_id, data)


@router.delete("/{product_id}", response_model=APIResponse)
def delete_product(
    product_id: int,
    admin: Identity = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Delete a product (ADMIN only)"""
    product_service.delete_product(db, product_id)
    return APIResponse(message="Product deleted successfully")

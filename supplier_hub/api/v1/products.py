from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from supplier_hub.api.dependencies import get_current_user
from supplier_hub.core.database import get_db
from supplier_hub.models.supplier import SupplierUser
from supplier_hub.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from supplier_hub.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[ProductResponse])
async def list_products(
    available_only: bool = False,
    db: Session = Depends(get_db),
    current_user: SupplierUser = Depends(get_current_user)
):
    return ProductService(db, current_user.supplier_id).get_products(available_only=available_only)


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db),
    current_user: SupplierUser = Depends(get_current_user)
):
    return ProductService(db, current_user.supplier_id).create_product(product_data.model_dump())


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str,
    db: Session = Depends(get_db),
    current_user: SupplierUser = Depends(get_current_user)
):
    product = ProductService(db, current_user.supplier_id).get_product(product_id)
    if not product:
        raise HTTPException(404, detail="Product not found")
    return product


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    product_data: ProductUpdate,
    db: Session = Depends(get_db),
    current_user: SupplierUser = Depends(get_current_user)
):
    try:
        return ProductService(db, current_user.supplier_id).update_product(
            product_id, product_data.model_dump(exclude_unset=True)
        )
    except ValueError as e:
        raise HTTPException(404, detail=str(e))


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    db: Session = Depends(get_db),
    current_user: SupplierUser = Depends(get_current_user)
):
    try:
        ProductService(db, current_user.supplier_id).delete_product(product_id)
    except ValueError as e:
        raise HTTPException(404, detail=str(e))

    return {
        "success": True,
        "message": "Product deleted"
    }

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from supplier_hub.api.dependencies import get_current_user, require_admin
from supplier_hub.core.database import get_db
from supplier_hub.models.supplier import SupplierUser
from supplier_hub.schemas.supplier import SupplierResponse, SupplierUpdate

router = APIRouter(prefix="/supplier", tags=["supplier"])


@router.get("", response_model=SupplierResponse)
async def get_supplier(current_user: SupplierUser = Depends(get_current_user)):
    """Profile and settings of the current user's supplier"""
    return current_user.supplier


@router.patch("", response_model=SupplierResponse)
async def update_supplier(
    data: SupplierUpdate,
    current_user: SupplierUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    supplier = current_user.supplier

    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(supplier, key, value)

    db.commit()
    db.refresh(supplier)
    return supplier

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from supplier_hub.api.dependencies import get_current_user
from supplier_hub.core.database import get_db
from supplier_hub.models.supplier import SupplierUser
from supplier_hub.schemas.connection import ConnectionCreate, ConnectionResponse
from supplier_hub.services.connection_service import ConnectionService

router = APIRouter(prefix="/connections", tags=["connections"])


@router.get("", response_model=List[ConnectionResponse])
async def list_connections(
    db: Session = Depends(get_db),
    current_user: SupplierUser = Depends(get_current_user)
):
    return ConnectionService(db, current_user.supplier_id).list_connections()


@router.post("", response_model=ConnectionResponse, status_code=201)
async def create_connection(
    data: ConnectionCreate,
    db: Session = Depends(get_db),
    current_user: SupplierUser = Depends(get_current_user)
):
    try:
        return ConnectionService(db, current_user.supplier_id).create_connection(data.model_dump())
    except ValueError as e:
        raise HTTPException(400, detail=str(e))


def _set_status(db: Session, supplier_id: int, connection_id: int, status: str):
    service = ConnectionService(db, supplier_id)
    connection = service.get_connection(connection_id)
    if not connection:
        raise HTTPException(404, detail="Connection not found")
    return service.set_status(connection, status)


@router.post("/{connection_id}/accept", response_model=ConnectionResponse)
async def accept_connection(
    connection_id: int,
    db: Session = Depends(get_db),
    current_user: SupplierUser = Depends(get_current_user)
):
    return _set_status(db, current_user.supplier_id, connection_id, "active")


@router.post("/{connection_id}/reject", response_model=ConnectionResponse)
async def reject_connection(
    connection_id: int,
    db: Session = Depends(get_db),
    current_user: SupplierUser = Depends(get_current_user)
):
    return _set_status(db, current_user.supplier_id, connection_id, "rejected")

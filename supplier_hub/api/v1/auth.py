"""
Portal authentication endpoints (email + password -> JWT)
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from supplier_hub.api.dependencies import get_current_user
from supplier_hub.core.config import Settings, get_settings
from supplier_hub.core.database import get_db
from supplier_hub.models.supplier import SupplierUser
from supplier_hub.schemas.supplier import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from supplier_hub.services.auth_service import AuthService


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(
    data: RegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """
    Register a supplier and its admin user

    Flow:
    1. Reject an email already in use
    2. Create supplier with default payment terms
    3. Create admin user
    4. Return token
    """
    auth_service = AuthService(db, settings)

    if auth_service.email_taken(data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This email is already registered"
        )

    user = auth_service.register_supplier(
        supplier_name=data.supplier_name,
        supplier_email=data.supplier_email,
        name=data.name,
        email=data.email,
        password=data.password,
        phone=data.phone,
    )

    return TokenResponse(
        access_token=auth_service.create_access_token_for_user(user),
        supplier_id=user.supplier_id,
        role=user.role,
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    auth_service = AuthService(db, settings)
    user = auth_service.authenticate_user(data.email, data.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )

    return TokenResponse(
        access_token=auth_service.create_access_token_for_user(user),
        supplier_id=user.supplier_id,
        role=user.role,
    )


@router.get("/me", response_model=UserResponse)
async def me(current_user: SupplierUser = Depends(get_current_user)):
    return current_user

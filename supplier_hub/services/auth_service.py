import logging
from typing import Optional
from sqlalchemy.orm import Session
from supplier_hub.core.config import Settings
from supplier_hub.core.security import hash_password, verify_password, create_access_token, decode_token
from supplier_hub.models.supplier import Supplier, SupplierUser

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    def email_taken(self, email: str) -> bool:
        return self.db.query(SupplierUser).filter(SupplierUser.email == email).first() is not None

    def register_supplier(
        self,
        supplier_name: str,
        supplier_email: str,
        name: str,
        email: str,
        password: str,
        phone: Optional[str] = None,
    ) -> SupplierUser:
        """Create a supplier with default payment terms and its first admin user"""
        supplier = Supplier(
            name=supplier_name,
            email=supplier_email,
            phone=phone,
            payment_terms={
                "method": "bank_transfer",
                "daysNet": self.settings.DEFAULT_PAYMENT_TERMS_DAYS,
            },
            delivery_info={"estimatedDeliveryDays": 1, "deliveryAreas": []},
        )
        self.db.add(supplier)
        self.db.flush()

        user = SupplierUser(
            supplier_id=supplier.id,
            email=email,
            name=name,
            role="admin",
            password_hash=hash_password(password),
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"[Portal] Supplier registered: {supplier.name} (ID: {supplier.id})")
        return user

    def authenticate_user(self, email: str, password: str) -> SupplierUser | None:
        user = self.db.query(SupplierUser).filter(
            SupplierUser.email == email.strip().lower(),
            SupplierUser.is_active == True
        ).first()

        if not user:
            return None

        if not verify_password(password, user.password_hash):
            return None

        return user

    def create_access_token_for_user(self, user: SupplierUser) -> str:
        # 'sub' carries the user id
        return create_access_token(
            data={"sub": str(user.id), "supplier_id": user.supplier_id, "role": user.role},
            settings=self.settings
        )

    def get_current_user(self, token: str) -> Optional[SupplierUser]:
        payload = decode_token(token, self.settings)
        if not payload:
            return None

        try:
            user_id = int(payload.get("sub"))
        except (ValueError, TypeError):
            logger.warning("[Portal] Token without a usable 'sub'")
            return None

        return self.db.query(SupplierUser).filter(
            SupplierUser.id == user_id,
            SupplierUser.is_active == True
        ).first()

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from supplier_hub.api.dependencies import get_current_user
from supplier_hub.core.database import get_db
from supplier_hub.models.supplier import SupplierUser
from supplier_hub.schemas.analytics import SupplierAnalytics
from supplier_hub.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("", response_model=SupplierAnalytics)
async def get_analytics(
    db: Session = Depends(get_db),
    current_user: SupplierUser = Depends(get_current_user)
):
    return AnalyticsService(db, current_user.supplier_id).compute()

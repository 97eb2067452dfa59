"""Admin menu API"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from customer_api.api.deps import get_store_context
from customer_api.models.base import get_db
from customer_api.services.admin_menu import MenuContext, admin_menu_registry
from customer_api.services.localization_service import LocalizationService
from customer_api.services.store_context import StoreContext

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/menu")
async def get_admin_menu(
    request: Request,
    language_id: Optional[int] = Query(None, description="Defaults to the store language"),
    db: Session = Depends(get_db),
    store_context: StoreContext = Depends(get_store_context),
):
    """Admin menu tree including the entries registered at startup."""
    if language_id is None:
        language_id = store_context.get_default_language_id()
    context = MenuContext(
        localization=LocalizationService(db),
        language_id=language_id,
        store_location=str(request.base_url),
    )
    return admin_menu_registry.build(context).to_dict()

"""Shared FastAPI dependencies"""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from customer_api.models.base import get_db
from customer_api.services.customer_api_service import CustomerApiService
from customer_api.services.store_context import StoreContext


def get_store_context(request: Request, db: Session = Depends(get_db)) -> StoreContext:
    return StoreContext(db, host=request.headers.get("host"))


def get_customer_api_service(
    db: Session = Depends(get_db),
    store_context: StoreContext = Depends(get_store_context),
) -> CustomerApiService:
    return CustomerApiService(db, store_context)

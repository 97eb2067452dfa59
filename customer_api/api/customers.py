"""
Customers API

List, search and single-customer endpoints plus the customer's language
and currency preferences.
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from customer_api.api.deps import get_customer_api_service
from customer_api.config import get_settings
from customer_api.models import Currency, Customer, Language
from customer_api.schemas import (
    CurrencyDto,
    CustomerDto,
    CustomersCountRootObject,
    CustomersRootObject,
    LanguageDto,
    SetCurrencyRequest,
    SetLanguageRequest,
)
from customer_api.services.customer_api_service import (
    CustomerApiService,
    DEFAULT_ORDER,
    DEFAULT_PAGE_VALUE,
    DEFAULT_SINCE_ID,
)
from customer_api.services.search_query import InvalidOrderError, UnknownSearchFieldError
from customer_api.utils.logger import log

router = APIRouter(prefix="/api/customers", tags=["customers"])

settings = get_settings()


def _validate_paging(limit: int, page: int) -> None:
    if limit < settings.min_limit or limit > settings.max_limit:
        raise HTTPException(status_code=400, detail={"limit": ["invalid limit parameter"]})
    if page < DEFAULT_PAGE_VALUE:
        raise HTTPException(status_code=400, detail={"page": ["invalid page parameter"]})


def _require_customer(service: CustomerApiService, customer_id: int) -> Customer:
    if customer_id <= 0:
        raise HTTPException(status_code=400, detail={"id": ["invalid id"]})
    customer = service.get_customer_entity_by_id(customer_id)
    if customer is None:
        raise HTTPException(status_code=404, detail={"customer": ["not found"]})
    return customer


@router.get("", response_model=CustomersRootObject)
async def get_customers(
    created_at_min: Optional[datetime] = Query(None, description="Created strictly after"),
    created_at_max: Optional[datetime] = Query(None, description="Created strictly before"),
    limit: int = Query(settings.default_limit, description="Page size"),
    page: int = Query(DEFAULT_PAGE_VALUE, description="1-indexed page"),
    since_id: int = Query(DEFAULT_SINCE_ID, description="Only ids greater than this"),
    service: CustomerApiService = Depends(get_customer_api_service),
):
    """Active, non-system customers of the current store."""
    _validate_paging(limit, page)
    if since_id < 0:
        raise HTTPException(status_code=400, detail={"since_id": ["invalid since_id parameter"]})

    customers = service.get_customers_dtos(
        created_at_min=created_at_min,
        created_at_max=created_at_max,
        limit=limit,
        page=page,
        since_id=since_id,
    )
    return CustomersRootObject(customers=customers)


@router.get("/count", response_model=CustomersCountRootObject)
async def get_customers_count(
    service: CustomerApiService = Depends(get_customer_api_service),
):
    return CustomersCountRootObject(count=service.get_customers_count())


@router.get("/search", response_model=CustomersRootObject)
async def search_customers(
    query: str = Query("", description="field:value pairs, e.g. first_name:John"),
    order: str = Query(DEFAULT_ORDER, description="e.g. 'email desc, id'"),
    page: int = Query(DEFAULT_PAGE_VALUE),
    limit: int = Query(settings.default_limit),
    service: CustomerApiService = Depends(get_customer_api_service),
):
    """Search customers by field:value pairs."""
    _validate_paging(limit, page)
    try:
        customers = service.search(query=query, order=order, page=page, limit=limit)
    except UnknownSearchFieldError as e:
        raise HTTPException(status_code=400, detail={"query": [str(e)]})
    except InvalidOrderError as e:
        raise HTTPException(status_code=400, detail={"order": [str(e)]})
    return CustomersRootObject(customers=customers)


@router.get("/{customer_id}", response_model=CustomersRootObject)
async def get_customer_by_id(
    customer_id: int,
    service: CustomerApiService = Depends(get_customer_api_service),
):
    if customer_id <= 0:
        raise HTTPException(status_code=400, detail={"id": ["invalid id"]})
    customer = service.get_customer_by_id(customer_id)
    if customer is None:
        raise HTTPException(status_code=404, detail={"customer": ["not found"]})
    return CustomersRootObject(customers=[customer])


# ── Language / currency ──────────────────────────────────

@router.get("/{customer_id}/language", response_model=LanguageDto)
async def get_customer_language(
    customer_id: int,
    service: CustomerApiService = Depends(get_customer_api_service),
):
    customer = _require_customer(service, customer_id)
    language = service.get_customer_language(customer)
    if language is None:
        raise HTTPException(status_code=404, detail={"language": ["not found"]})
    return language


@router.put("/{customer_id}/language", response_model=CustomerDto)
async def set_customer_language(
    customer_id: int,
    body: SetLanguageRequest,
    service: CustomerApiService = Depends(get_customer_api_service),
):
    customer = _require_customer(service, customer_id)
    language = None
    if body.language_id:
        language = service.db.get(Language, body.language_id)
        if language is None or not language.published:
            raise HTTPException(status_code=400, detail={"language_id": ["invalid language"]})
    service.set_customer_language(customer, language)
    log.info(f"Updated language of customer {customer_id}")
    return service.get_customer_by_id(customer_id)


@router.get("/{customer_id}/currency", response_model=CurrencyDto)
async def get_customer_currency(
    customer_id: int,
    service: CustomerApiService = Depends(get_customer_api_service),
):
    customer = _require_customer(service, customer_id)
    currency = service.get_customer_currency(customer)
    if currency is None:
        raise HTTPException(status_code=404, detail={"currency": ["not found"]})
    return currency


@router.put("/{customer_id}/currency", response_model=CustomerDto)
async def set_customer_currency(
    customer_id: int,
    body: SetCurrencyRequest,
    service: CustomerApiService = Depends(get_customer_api_service),
):
    customer = _require_customer(service, customer_id)
    currency = service.db.get(Currency, body.currency_id)
    if currency is None or not currency.published:
        raise HTTPException(status_code=400, detail={"currency_id": ["invalid currency"]})
    service.set_customer_currency(customer, currency)
    log.info(f"Updated currency of customer {customer_id}")
    return service.get_customer_by_id(customer_id)

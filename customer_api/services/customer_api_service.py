"""
Customer API Service

Builds customer DTOs for the REST API: filters and pages the customers
table, left-joins the customer's generic attribute rows and folds them
(names, cookie consent) into one DTO per customer, then attaches the
newsletter flag and addresses.
"""
from datetime import datetime
from itertools import groupby
from typing import Dict, List, NamedTuple, Optional

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Query, Session

from customer_api.config import get_settings
from customer_api.models import (
    Currency,
    Customer,
    GenericAttribute,
    Language,
    CUSTOMER_KEY_GROUP,
    FIRST_NAME_ATTRIBUTE,
    LAST_NAME_ATTRIBUTE,
    EU_COOKIE_LAW_ACCEPTED_ATTRIBUTE,
)
from customer_api.schemas import CustomerDto
from customer_api.services.address_api_service import AddressApiService
from customer_api.services.newsletter_service import NewsletterService
from customer_api.services.search_query import (
    EU_COOKIE_LAW_ACCEPTED,
    customer_predicates,
    ensure_search_query_is_valid,
    parse_bool,
    parse_order,
    resolve_search_fields,
)
from customer_api.services.store_context import StoreContext, is_store_scoped
from customer_api.utils.logger import log

DEFAULT_LIMIT = 50
DEFAULT_PAGE_VALUE = 1
DEFAULT_SINCE_ID = 0
DEFAULT_ORDER = "Id"


class CustomerAttributeMapping(NamedTuple):
    """One row of the customer / generic attribute left join."""
    customer: Customer
    attribute: Optional[GenericAttribute]


def merge(mappings: List[CustomerAttributeMapping], default_language_id: int = 0) -> CustomerDto:
    """
    Fold the attribute rows of one customer into its DTO.

    Rows are expected in ascending attribute id; the first row seen for a
    key wins and later duplicates are ignored.
    """
    customer = mappings[0].customer
    customer_dto = CustomerDto.model_validate(customer)
    if not customer_dto.language_id:
        customer_dto.language_id = default_language_id

    seen = set()
    for mapping in mappings:
        attribute = mapping.attribute
        if attribute is None:
            continue
        key = attribute.key.lower()
        if key in seen:
            continue
        seen.add(key)

        if key == EU_COOKIE_LAW_ACCEPTED_ATTRIBUTE.lower():
            customer_dto.eu_cookie_law_accepted = _parse_cookie_flag(attribute)
        elif key == FIRST_NAME_ATTRIBUTE.lower() and not customer_dto.first_name:
            customer_dto.first_name = attribute.value
        elif key == LAST_NAME_ATTRIBUTE.lower() and not customer_dto.last_name:
            customer_dto.last_name = attribute.value

    return customer_dto


def _parse_cookie_flag(attribute: GenericAttribute) -> Optional[bool]:
    if attribute.value is None or not attribute.value.strip():
        return None
    flag = parse_bool(attribute.value)
    if flag is None:
        log.warning(
            f"Customer {attribute.entity_id} has unparsable {attribute.key} value {attribute.value!r}"
        )
    return flag


class CustomerApiService:
    """Customer DTO retrieval backing the /api/customers endpoints"""

    def __init__(self, db: Session, store_context: StoreContext):
        self.db = db
        self.store_context = store_context
        self.address_service = AddressApiService(db)
        self.settings = get_settings()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_customers_dtos(
        self,
        created_at_min: Optional[datetime] = None,
        created_at_max: Optional[datetime] = None,
        limit: int = DEFAULT_LIMIT,
        page: int = DEFAULT_PAGE_VALUE,
        since_id: int = DEFAULT_SINCE_ID,
    ) -> List[CustomerDto]:
        query = self.get_customers_query(created_at_min, created_at_max, since_id)

        result = self.handle_customer_generic_attributes(None, query, limit=limit, page=page)

        self._newsletter_service().set_subscription_statuses(result)
        self._set_addresses(result)

        return result

    def get_customers_count(self) -> int:
        store_id = self.store_context.get_current_store().id
        return (
            self.db.query(func.count(Customer.id))
            .filter(
                Customer.deleted == False,
                is_store_scoped(Customer.registered_in_store_id, store_id),
            )
            .scalar()
        )

    def search(
        self,
        query: str = "",
        order: str = DEFAULT_ORDER,
        page: int = DEFAULT_PAGE_VALUE,
        limit: int = DEFAULT_LIMIT,
    ) -> List[CustomerDto]:
        """
        Search customers with a ``field:value`` query.

        Raises UnknownSearchFieldError (reject policy) or InvalidOrderError.
        """
        search_params = ensure_search_query_is_valid(query)
        if search_params is None:
            return []

        search_params = resolve_search_fields(
            search_params, policy=self.settings.search_unknown_field_policy
        )

        customers = self.db.query(Customer).filter(Customer.deleted == False)
        for predicate in customer_predicates(search_params):
            customers = customers.filter(predicate)

        result = self.handle_customer_generic_attributes(
            search_params, customers, limit=limit, page=page, order=order
        )

        self._newsletter_service().set_subscription_statuses(result)
        self._set_addresses(result)

        log.info(f"Customer search {query!r} matched {len(result)} customers on page {page}")
        return result

    def get_customer_entity_by_id(self, customer_id: int) -> Optional[Customer]:
        return (
            self.db.query(Customer)
            .filter(Customer.id == customer_id, Customer.deleted == False)
            .first()
        )

    def get_customer_by_id(self, customer_id: int, show_deleted: bool = False) -> Optional[CustomerDto]:
        if customer_id == 0:
            return None

        customers = self.db.query(Customer).filter(Customer.id == customer_id)
        if not show_deleted:
            customers = customers.filter(Customer.deleted == False)

        mappings = self._attribute_mappings(customers)
        if not mappings:
            return None

        customer_dto = merge(mappings, self.store_context.get_default_language_id())

        self._newsletter_service().set_subscription_status(customer_dto)
        self._set_addresses([customer_dto])

        return customer_dto

    # ------------------------------------------------------------------
    # Language / currency
    # ------------------------------------------------------------------

    def get_customer_language(self, customer: Optional[Customer]) -> Optional[Language]:
        language_id = customer.language_id if customer is not None else 0
        if not language_id:
            return None
        return self.db.query(Language).filter(Language.id == language_id).first()

    def set_customer_language(self, customer: Customer, language: Optional[Language]) -> None:
        customer.language_id = language.id if language is not None else 0
        self.db.commit()
        log.info(f"Customer {customer.id} language set to {customer.language_id}")

    def get_customer_currency(self, customer: Optional[Customer]) -> Optional[Currency]:
        currency_id = customer.currency_id if customer is not None else 0
        if not currency_id:
            return None
        return self.db.query(Currency).filter(Currency.id == currency_id).first()

    def set_customer_currency(self, customer: Customer, currency: Currency) -> None:
        if currency is None:
            raise ValueError("currency is required")
        customer.currency_id = currency.id
        self.db.commit()
        log.info(f"Customer {customer.id} currency set to {customer.currency_id}")

    # ------------------------------------------------------------------
    # Query construction
    # ------------------------------------------------------------------

    def get_customers_query(
        self,
        created_at_min: Optional[datetime] = None,
        created_at_max: Optional[datetime] = None,
        since_id: int = 0,
    ) -> Query:
        current_store_id = self.store_context.get_current_store().id

        query = self.db.query(Customer).filter(
            Customer.deleted == False,
            Customer.is_system_account == False,
            Customer.active == True,
        )

        query = query.filter(is_store_scoped(Customer.registered_in_store_id, current_store_id))

        if created_at_min is not None:
            query = query.filter(Customer.created_on_utc > created_at_min)

        if created_at_max is not None:
            query = query.filter(Customer.created_on_utc < created_at_max)

        query = query.order_by(Customer.id)

        if since_id > 0:
            query = query.filter(Customer.id > since_id)

        return query

    def handle_customer_generic_attributes(
        self,
        search_params: Optional[Dict[str, str]],
        query: Query,
        limit: int = DEFAULT_LIMIT,
        page: int = DEFAULT_PAGE_VALUE,
        order: str = DEFAULT_ORDER,
    ) -> List[CustomerDto]:
        """
        Join the customers in ``query`` with their attribute rows and merge
        them into one DTO per customer.

        A cookie-consent search narrows the customer set to owners of a
        matching attribute row before the rows are grouped, so their other
        attributes are still merged. The requested order is applied to the
        whole set, then the 1-indexed page is cut.
        """
        if search_params and EU_COOKIE_LAW_ACCEPTED in search_params:
            query = self._filter_by_attribute(
                query, EU_COOKIE_LAW_ACCEPTED_ATTRIBUTE, search_params[EU_COOKIE_LAW_ACCEPTED]
            )

        page_query = (
            query.order_by(None)
            .order_by(*parse_order(order))
            .offset((page - 1) * limit)
            .limit(limit)
        )
        page_ids = [customer_id for (customer_id,) in page_query.with_entities(Customer.id)]
        if not page_ids:
            return []

        mappings = self._attribute_mappings(
            self.db.query(Customer).filter(Customer.id.in_(page_ids))
        )
        groups = {
            customer_id: list(rows)
            for customer_id, rows in groupby(mappings, key=lambda m: m.customer.id)
        }

        default_language_id = self.store_context.get_default_language_id()
        return [merge(groups[customer_id], default_language_id) for customer_id in page_ids]

    def _attribute_mappings(self, customers: Query) -> List[CustomerAttributeMapping]:
        """Left join customers with their attribute rows, grouped by customer id."""
        rows = (
            customers.outerjoin(
                GenericAttribute,
                and_(
                    GenericAttribute.entity_id == Customer.id,
                    GenericAttribute.key_group == CUSTOMER_KEY_GROUP,
                ),
            )
            .with_entities(Customer, GenericAttribute)
            .order_by(None)
            .order_by(Customer.id, GenericAttribute.id)
            .all()
        )
        return [CustomerAttributeMapping(customer, attribute) for customer, attribute in rows]

    def _filter_by_attribute(self, query: Query, key: str, value: str) -> Query:
        matching = select(GenericAttribute.entity_id).where(
            GenericAttribute.key_group == CUSTOMER_KEY_GROUP,
            func.lower(GenericAttribute.key) == key.lower(),
            func.lower(GenericAttribute.value) == value.lower(),
        )
        return query.filter(Customer.id.in_(matching))

    # ------------------------------------------------------------------
    # Enrichment
    # ------------------------------------------------------------------

    def _newsletter_service(self) -> NewsletterService:
        return NewsletterService(self.db, self.store_context.get_current_store().id)

    def _set_addresses(self, customer_dtos: List[CustomerDto]) -> None:
        for customer_dto in customer_dtos:
            customer_dto.addresses = self.address_service.get_addresses_by_customer_id(customer_dto.id)
            customer = self.db.get(Customer, customer_dto.id)
            customer_dto.billing_address = self._customer_address(customer, customer.billing_address_id)
            customer_dto.shipping_address = self._customer_address(customer, customer.shipping_address_id)

    def _customer_address(self, customer: Customer, address_id: Optional[int]):
        if not address_id:
            return None
        return self.address_service.get_customer_address(customer.id, address_id)

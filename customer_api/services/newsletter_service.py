"""
Newsletter subscription status for customer DTOs

The active subscriber emails of a store are loaded once and cached
process-wide; entries go stale for at most newsletter_cache_ttl_seconds
unless invalidate_newsletter_cache() is called.
"""
from typing import Iterable, List, Optional, Set

from sqlalchemy.orm import Session

from customer_api.config import get_settings
from customer_api.models import NewsLetterSubscription
from customer_api.schemas import CustomerDto
from customer_api.utils.cache import static_cache
from customer_api.utils.logger import log

NEWSLETTER_SUBSCRIBERS_KEY = "customer_api:newsletter_subscribers:"


def invalidate_newsletter_cache() -> int:
    return static_cache.invalidate(NEWSLETTER_SUBSCRIBERS_KEY)


class NewsletterService:
    def __init__(self, db: Session, store_id: int):
        self.db = db
        self.store_id = store_id

    def get_all_subscriber_emails(self) -> Set[str]:
        """Lowercased emails of active subscriptions for the store."""
        settings = get_settings()
        return static_cache.get_or_set(
            f"{NEWSLETTER_SUBSCRIBERS_KEY}{self.store_id}",
            self._load_subscriber_emails,
            ttl=settings.newsletter_cache_ttl_seconds,
        )

    def _load_subscriber_emails(self) -> Set[str]:
        rows = (
            self.db.query(NewsLetterSubscription.email)
            .filter(
                NewsLetterSubscription.store_id == self.store_id,
                NewsLetterSubscription.active == True,
            )
            .all()
        )
        emails = {email.lower() for (email,) in rows if email}
        log.debug(f"Loaded {len(emails)} newsletter subscribers for store {self.store_id}")
        return emails

    def set_subscription_status(
        self,
        customer_dto: Optional[CustomerDto],
        subscriber_emails: Optional[Iterable[str]] = None,
    ) -> None:
        if customer_dto is None or not customer_dto.email:
            return
        if subscriber_emails is None:
            subscriber_emails = self.get_all_subscriber_emails()
        if customer_dto.email.lower() in subscriber_emails:
            customer_dto.subscribed_to_newsletter = True

    def set_subscription_statuses(self, customer_dtos: Optional[List[CustomerDto]]) -> None:
        if customer_dtos is None:
            return
        subscriber_emails = self.get_all_subscriber_emails()
        for customer_dto in customer_dtos:
            self.set_subscription_status(customer_dto, subscriber_emails)

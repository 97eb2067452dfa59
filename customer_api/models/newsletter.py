"""Newsletter subscriptions (per store, keyed by email)"""
from sqlalchemy import Column, Integer, String, DateTime, Boolean
from sqlalchemy.sql import func

from customer_api.models.base import Base


class NewsLetterSubscription(Base):
    __tablename__ = "newsletter_subscriptions"

    id = Column(Integer, primary_key=True, index=True)
    newsletter_subscription_guid = Column(String(36), nullable=True)
    email = Column(String, index=True, nullable=True)
    active = Column(Boolean, default=True, nullable=False)
    store_id = Column(Integer, nullable=False, index=True)
    created_on_utc = Column(DateTime, server_default=func.now())

"""Localized string resources"""
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from customer_api.models import LocaleStringResource


class LocalizationService:
    def __init__(self, db: Session):
        self.db = db

    def get_resource(self, resource_name: str, language_id: int, default_value: Optional[str] = None) -> Optional[str]:
        """Resource value for the language; default_value when it is missing."""
        resource = (
            self.db.query(LocaleStringResource)
            .filter(
                func.lower(LocaleStringResource.resource_name) == resource_name.strip().lower(),
                LocaleStringResource.language_id == language_id,
            )
            .first()
        )
        if resource is None or resource.resource_value is None:
            return default_value
        return resource.resource_value

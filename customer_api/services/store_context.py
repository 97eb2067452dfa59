"""
Current store resolution and store-level defaults
"""
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from customer_api.config import get_settings
from customer_api.models import Language, Store, StoreMapping
from customer_api.utils.logger import log


class StoreContext:
    """Resolves the store a request is served for.

    Order: configured ``current_store_id``, then the store whose hosts
    include the request host, then the first store by display order.
    """

    def __init__(self, db: Session, host: Optional[str] = None, store_id: Optional[int] = None):
        self.db = db
        self.host = (host or "").split(":")[0].lower()
        self._store_id = store_id if store_id is not None else get_settings().current_store_id
        self._current: Optional[Store] = None

    def get_current_store(self) -> Store:
        if self._current is None:
            self._current = self._resolve()
        return self._current

    def _resolve(self) -> Store:
        if self._store_id:
            store = self.db.query(Store).filter(Store.id == self._store_id).first()
            if store is not None:
                return store
            log.warning(f"Configured store {self._store_id} not found, falling back to host lookup")

        stores = self.db.query(Store).order_by(Store.display_order, Store.id).all()
        if self.host:
            for store in stores:
                if self.host in store.host_list():
                    return store
        if stores:
            return stores[0]

        # No stores configured: everything is scoped to the global store 0
        return Store(id=0, name="", default_language_id=0, display_order=0)

    def get_default_language_id(self) -> int:
        """
        Default language of the current store.

        Falls back to the published languages the store is allowed to use
        (all of them when none is mapped), lowest display order first.
        """
        store = self.get_current_store()
        if store.default_language_id:
            return store.default_language_id

        all_languages = (
            self.db.query(Language)
            .filter(Language.published == True)
            .order_by(Language.display_order, Language.id)
            .all()
        )
        if not all_languages:
            return 0

        mapped_ids = {
            m.entity_id
            for m in self.db.query(StoreMapping).filter(
                StoreMapping.entity_name == "Language",
                StoreMapping.store_id == store.id,
            )
        }
        store_languages = [
            lang for lang in all_languages
            if not lang.limited_to_stores or lang.id in mapped_ids
        ]
        if not store_languages:
            store_languages = all_languages

        return store_languages[0].id


def is_store_scoped(column, store_id: int):
    """Row belongs to every store (0) or to store_id."""
    return or_(column == 0, column == store_id)

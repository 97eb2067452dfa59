"""
Customer search query parsing

Turns a free-text query such as ``first_name:John email:@example.com`` into
an ordered field -> value mapping and maps each field onto a fixed set of
filterable customer fields. Also parses the ``order`` expression used to sort
search results.
"""
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from sqlalchemy import and_, exists, false, func, or_
from sqlalchemy.sql.elements import ColumnElement

from customer_api.models import (
    Customer,
    GenericAttribute,
    CUSTOMER_KEY_GROUP,
    FIRST_NAME_ATTRIBUTE,
    LAST_NAME_ATTRIBUTE,
    EU_COOKIE_LAW_ACCEPTED_ATTRIBUTE,
)
from customer_api.utils.logger import log

SPLIT_PATTERN = re.compile(r"(\w+):")

# Normalised search key of the cookie-consent attribute filter
EU_COOKIE_LAW_ACCEPTED = "eucookielawaccepted"

UNKNOWN_FIELD_IGNORE = "ignore"
UNKNOWN_FIELD_REJECT = "reject"


class UnknownSearchFieldError(ValueError):
    """A search field that is not filterable, under the "reject" policy."""

    def __init__(self, field: str):
        super().__init__(f"unknown search field: {field}")
        self.field = field


class InvalidOrderError(ValueError):
    """An order expression naming a column that cannot be sorted on."""


def normalize_field(field: str) -> str:
    return field.replace("_", "").strip().lower()


def parse_search_query(query: str) -> Dict[str, str]:
    """
    Split ``field:value field2:value2`` into an ordered mapping.

    Field names lose their underscores; leading/trailing whitespace is
    trimmed from both sides. A trailing field without a value is dropped.
    Fewer than two tokens yields an empty mapping.
    """
    parsed: Dict[str, str] = {}

    tokens = [t for t in SPLIT_PATTERN.split(query) if t != ""]
    if len(tokens) < 2:
        return parsed

    for i in range(0, len(tokens) - 1, 2):
        field = tokens[i].replace("_", "").strip()
        value = tokens[i + 1].strip()
        if field and value:
            parsed[field] = value

    return parsed


def ensure_search_query_is_valid(
    query: Optional[str],
    parse: Callable[[str], Dict[str, str]] = parse_search_query,
) -> Optional[Dict[str, str]]:
    """None for an empty query (no search is run), else the parsed mapping."""
    if not query:
        return None
    return parse(query)


# ---------------------------------------------------------------------------
# Filterable fields
# ---------------------------------------------------------------------------

def _text_match(column, value: str) -> ColumnElement:
    return or_(column == value, column.contains(value, autoescape=True))


def _attribute_match(key: str, value: str) -> ColumnElement:
    return exists().where(
        and_(
            GenericAttribute.entity_id == Customer.id,
            GenericAttribute.key_group == CUSTOMER_KEY_GROUP,
            func.lower(GenericAttribute.key) == key.lower(),
            _text_match(GenericAttribute.value, value),
        )
    )


def _text_field(column) -> Callable[[str], ColumnElement]:
    return lambda value: _text_match(column, value)


def _name_field(column, attribute_key: str) -> Callable[[str], ColumnElement]:
    # Names live on the customer row or, for older accounts, in generic attributes
    return lambda value: or_(_text_match(column, value), _attribute_match(attribute_key, value))


def parse_bool(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def _bool_field(column) -> Callable[[str], ColumnElement]:
    def predicate(value: str) -> ColumnElement:
        parsed = parse_bool(value)
        if parsed is None:
            return false()
        return column == parsed
    return predicate


def _int_field(column) -> Callable[[str], ColumnElement]:
    def predicate(value: str) -> ColumnElement:
        try:
            return column == int(value)
        except ValueError:
            return false()
    return predicate


@dataclass(frozen=True)
class SearchField:
    name: str
    predicate: Optional[Callable[[str], ColumnElement]] = None
    # Applied while joining attributes instead of on the customer query
    attribute_key: Optional[str] = None


SEARCH_FIELDS: Dict[str, SearchField] = {
    f.name: f
    for f in [
        SearchField("id", _int_field(Customer.id)),
        SearchField("username", _text_field(Customer.username)),
        SearchField("email", _text_field(Customer.email)),
        SearchField("firstname", _name_field(Customer.first_name, FIRST_NAME_ATTRIBUTE)),
        SearchField("lastname", _name_field(Customer.last_name, LAST_NAME_ATTRIBUTE)),
        SearchField("company", _text_field(Customer.company)),
        SearchField("phone", _text_field(Customer.phone)),
        SearchField("systemname", _text_field(Customer.system_name)),
        SearchField("gender", _text_field(Customer.gender)),
        SearchField("customerguid", _text_field(Customer.customer_guid)),
        SearchField("admincomment", _text_field(Customer.admin_comment)),
        SearchField("lastipaddress", _text_field(Customer.last_ip_address)),
        SearchField("active", _bool_field(Customer.active)),
        SearchField("istaxexempt", _bool_field(Customer.is_tax_exempt)),
        SearchField(EU_COOKIE_LAW_ACCEPTED, attribute_key=EU_COOKIE_LAW_ACCEPTED_ATTRIBUTE),
    ]
}


def resolve_search_fields(
    search_params: Dict[str, str],
    policy: str = UNKNOWN_FIELD_IGNORE,
) -> Dict[str, str]:
    """
    Keep only filterable fields, keyed by normalised name.

    Unknown fields are dropped under the "ignore" policy and raise
    UnknownSearchFieldError under "reject".
    """
    resolved: Dict[str, str] = {}
    for field, value in search_params.items():
        key = normalize_field(field)
        if key not in SEARCH_FIELDS:
            if policy == UNKNOWN_FIELD_REJECT:
                raise UnknownSearchFieldError(field)
            log.debug(f"Skipping unknown search field '{field}'")
            continue
        resolved[key] = value
    return resolved


def customer_predicates(search_params: Dict[str, str]) -> List[ColumnElement]:
    """Predicates on the customers table for the resolved search params."""
    predicates = []
    for key, value in search_params.items():
        field = SEARCH_FIELDS[key]
        if field.predicate is not None:
            predicates.append(field.predicate(value))
    return predicates


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------

ORDERABLE_COLUMNS = {
    "id": Customer.id,
    "username": Customer.username,
    "email": Customer.email,
    "firstname": Customer.first_name,
    "lastname": Customer.last_name,
    "company": Customer.company,
    "createdonutc": Customer.created_on_utc,
    "lastlogindateutc": Customer.last_login_date_utc,
    "lastactivitydateutc": Customer.last_activity_date_utc,
    "registeredinstoreid": Customer.registered_in_store_id,
}


def parse_order(order: Optional[str]) -> List[ColumnElement]:
    """
    Parse ``"email desc, id"`` into ORDER BY clauses.

    Always ends with ``id ASC`` so pagination is stable.
    """
    clauses = []
    has_id = False
    for part in (order or "").split(","):
        part = part.strip()
        if not part:
            continue
        pieces = part.split()
        if len(pieces) > 2:
            raise InvalidOrderError(f"invalid order expression: {part}")
        column = ORDERABLE_COLUMNS.get(normalize_field(pieces[0]))
        if column is None:
            raise InvalidOrderError(f"cannot order by: {pieces[0]}")
        direction = pieces[1].lower() if len(pieces) == 2 else "asc"
        if direction in ("asc", "ascending"):
            clauses.append(column.asc())
        elif direction in ("desc", "descending"):
            clauses.append(column.desc())
        else:
            raise InvalidOrderError(f"invalid order direction: {pieces[1]}")
        if normalize_field(pieces[0]) == "id":
            has_id = True
    if not has_id:
        clauses.append(Customer.id.asc())
    return clauses

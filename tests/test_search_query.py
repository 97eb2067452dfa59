"""
Search query parsing, field resolution and order parsing.

These are unit tests that do NOT require a database.
"""
import pytest

from customer_api.services.search_query import (
    InvalidOrderError,
    UnknownSearchFieldError,
    ensure_search_query_is_valid,
    parse_order,
    parse_search_query,
    resolve_search_fields,
)


# ────────────────────────────────────────────
# PARSER
# ────────────────────────────────────────────


class TestParseSearchQuery:

    def test_pairs_fields_and_values(self):
        assert parse_search_query("first_name:John last_name:Doe") == {
            "firstname": "John",
            "lastname": "Doe",
        }

    def test_values_keep_inner_spaces(self):
        assert parse_search_query("company:Acme Corp Ltd") == {"company": "Acme Corp Ltd"}

    @pytest.mark.parametrize("query", ["John", "first_name:", "   ", ":"])
    def test_fewer_than_two_tokens_is_empty(self, query):
        assert parse_search_query(query) == {}

    def test_trailing_field_without_value_is_dropped(self):
        assert parse_search_query("first_name:John last_name:") == {"firstname": "John"}

    def test_whitespace_only_value_is_skipped(self):
        assert parse_search_query("email:   company:Acme") == {"company": "Acme"}

    def test_repeated_field_keeps_last_value(self):
        assert parse_search_query("email:a email:b") == {"email": "b"}

    def test_empty_query_means_no_search(self):
        assert ensure_search_query_is_valid("") is None
        assert ensure_search_query_is_valid(None) is None

    def test_non_empty_query_is_parsed(self):
        assert ensure_search_query_is_valid("email:x@y.com") == {"email": "x@y.com"}


# ────────────────────────────────────────────
# FIELD RESOLUTION
# ────────────────────────────────────────────


class TestResolveSearchFields:

    def test_unknown_fields_are_ignored_by_default(self):
        resolved = resolve_search_fields({"firstname": "John", "shoesize": "42"})
        assert resolved == {"firstname": "John"}

    def test_field_names_are_case_insensitive(self):
        assert resolve_search_fields({"FirstName": "John"}) == {"firstname": "John"}

    def test_reject_policy_raises(self):
        with pytest.raises(UnknownSearchFieldError) as exc:
            resolve_search_fields({"shoesize": "42"}, policy="reject")
        assert exc.value.field == "shoesize"

    def test_cookie_field_is_known(self):
        assert resolve_search_fields({"eucookielawaccepted": "true"}) == {"eucookielawaccepted": "true"}


# ────────────────────────────────────────────
# ORDER
# ────────────────────────────────────────────


def _compiled(clauses):
    return [str(c) for c in clauses]


class TestParseOrder:

    def test_default_is_id_ascending(self):
        assert _compiled(parse_order("Id")) == ["customers.id ASC"]

    def test_id_tiebreak_is_appended(self):
        assert _compiled(parse_order("email desc")) == ["customers.email DESC", "customers.id ASC"]

    def test_multiple_columns(self):
        clauses = _compiled(parse_order("created_on_utc DESC, last_name"))
        assert clauses == [
            "customers.created_on_utc DESC",
            "customers.last_name ASC",
            "customers.id ASC",
        ]

    def test_empty_order_falls_back_to_id(self):
        assert _compiled(parse_order("")) == ["customers.id ASC"]

    @pytest.mark.parametrize("order", ["password", "email sideways", "email desc now"])
    def test_invalid_order_raises(self, order):
        with pytest.raises(InvalidOrderError):
            parse_order(order)

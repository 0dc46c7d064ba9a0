"""Test the rules engine and the book rule tables."""
from datetime import date

import pytest

from patterns.domain_config import ValidationConfig
from patterns.rules_engine import (
    FieldKind,
    FieldRule,
    evaluate_field_rules,
    evaluate_rules,
)
from verticals.books.rules import CREATE_RULES, UPDATE_RULES, build_schemas, validate

from conftest import BOOK, without_isbn


def test_field_rules_pass():
    rules = (FieldRule("pages", FieldKind.INTEGER, minimum=1),)
    result = evaluate_field_rules({"pages": 10}, rules)
    assert result.all_passed
    assert result.messages == []


def test_field_rules_stop_at_first_failure_per_field():
    rules = (FieldRule("pages", FieldKind.INTEGER, minimum=1),)
    result = evaluate_field_rules({"pages": "ten"}, rules)
    assert result.messages == ["instance.pages is not of a type(s) integer"]


def test_bool_is_not_an_integer():
    rules = (FieldRule("pages", FieldKind.INTEGER),)
    result = evaluate_field_rules({"pages": True}, rules)
    assert not result.all_passed


def test_additional_properties_allowed_when_requested():
    rules = (FieldRule("title", FieldKind.STRING),)
    result = evaluate_field_rules({"title": "x", "extra": 1}, rules, allow_additional=True)
    assert result.all_passed


def test_non_object_payload():
    result = evaluate_field_rules(["not", "an", "object"], CREATE_RULES)
    assert result.messages == ["instance is not of a type(s) object"]


def test_evaluate_rules_composes():
    ok = evaluate_field_rules({"title": "x"}, (FieldRule("title", FieldKind.STRING),))
    bad = evaluate_field_rules({}, (FieldRule("year", FieldKind.INTEGER),))
    combined = evaluate_rules(ok, bad)
    assert not combined.all_passed
    assert combined.messages == ['instance requires property "year"']


def test_tables_differ_only_by_isbn():
    assert [r.name for r in CREATE_RULES] == ["isbn"] + [r.name for r in UPDATE_RULES]


def test_create_accepts_full_book():
    result = validate(BOOK, "create")
    assert result.valid
    assert result.errors == []


def test_create_requires_isbn():
    result = validate(without_isbn(BOOK), "create")
    assert not result.valid
    assert result.errors == ['instance requires property "isbn"']


def test_update_accepts_book_without_isbn():
    assert validate(without_isbn(BOOK), "update").valid


def test_update_rejects_isbn():
    result = validate(BOOK, "update")
    assert result.errors == ['instance is not allowed to have the additional property "isbn"']


def test_year_upper_bound():
    result = validate({**BOOK, "year": 3000}, "create")
    assert result.errors == [
        f"instance.year must be less than or equal to {date.today().year}"
    ]


def test_year_must_be_whole_number():
    result = validate({**BOOK, "year": 2017.5}, "create")
    assert result.errors == ["instance.year is not of a type(s) integer"]


def test_pages_must_be_positive():
    result = validate({**BOOK, "pages": 0}, "create")
    assert result.errors == ["instance.pages must be greater than or equal to 1"]


def test_pages_must_fit_integer_column():
    result = validate({**BOOK, "pages": 2**31}, "create")
    assert result.errors == ["instance.pages must be less than or equal to 2147483647"]

    assert validate({**BOOK, "pages": 2**31 - 1}, "create").valid



def test_blank_string_rejected():
    result = validate({**BOOK, "title": "   "}, "create")
    assert result.errors == ["instance.title does not meet minimum length of 1"]


def test_errors_follow_declaration_order():
    payload = {"isbn": "1", "year": 3000, "pages": -1, "extra": "x"}
    result = validate(payload, "create")
    assert result.errors == [
        'instance requires property "amazon_url"',
        'instance requires property "author"',
        'instance requires property "language"',
        "instance.pages must be greater than or equal to 1",
        'instance requires property "publisher"',
        'instance requires property "title"',
        f"instance.year must be less than or equal to {date.today().year}",
        'instance is not allowed to have the additional property "extra"',
    ]


def test_unknown_schema():
    with pytest.raises(ValueError, match="Unknown book schema"):
        validate(BOOK, "patch")


def test_schemas_built_from_validation_config():
    schemas = build_schemas(ValidationConfig(min_year=1900, max_year=2000))

    result = validate(BOOK, "create", schemas)
    assert result.errors == ["instance.year must be less than or equal to 2000"]

    result = validate(without_isbn({**BOOK, "year": 1899}), "update", schemas)
    assert result.errors == ["instance.year must be greater than or equal to 1900"]

    assert validate(without_isbn({**BOOK, "year": 1999}), "update", schemas).valid

import pytest

from core.errors import ValidationError
from services.validation import (
    SWEET_CATEGORIES,
    validate_credentials,
    validate_positive_quantity,
    validate_sweet_fields,
)


def test_valid_sweet_is_cleaned():
    result = validate_sweet_fields({"name": "  Toffee Crunch ", "category": "Toffee", "price": 3, "quantity": 4.0})
    assert result.ok
    assert result.values == {"name": "Toffee Crunch", "category": "Toffee", "price": 3.0, "quantity": 4}


def test_every_category_is_accepted():
    for category in SWEET_CATEGORIES:
        assert validate_sweet_fields({"name": "Sweet", "category": category, "price": 0, "quantity": 0}).ok


def test_all_errors_are_reported_together():
    result = validate_sweet_fields({"name": "x", "category": "Cake", "price": -1, "quantity": -1})
    assert [e["field"] for e in result.errors] == ["name", "category", "price", "quantity"]


def test_partial_only_checks_supplied_fields():
    assert validate_sweet_fields({"price": 0.5}, partial=True).values == {"price": 0.5}
    assert validate_sweet_fields({}, partial=True).ok
    assert not validate_sweet_fields({"name": None}, partial=True).ok


def test_unknown_fields_are_dropped():
    result = validate_sweet_fields({"id": 7, "quantity": 2}, partial=True)
    assert result.values == {"quantity": 2}


def test_bool_is_not_a_number():
    result = validate_sweet_fields({"price": True, "quantity": False}, partial=True)
    assert [e["field"] for e in result.errors] == ["price", "quantity"]


def test_raise_for_errors():
    with pytest.raises(ValidationError) as exc_info:
        validate_sweet_fields({"category": "Cake"}, partial=True).raise_for_errors()
    assert exc_info.value.errors == [{"field": "category", "message": "Invalid category"}]
    assert exc_info.value.to_payload()["error"] == "Invalid category"


@pytest.mark.parametrize("qty, ok", [(1, True), (250, True), (0, False), (-1, False), (2.5, False), ("2", False)])
def test_positive_quantity(qty, ok):
    assert validate_positive_quantity(qty).ok is ok


def test_credentials():
    assert validate_credentials("someone@example.com", "secret1").ok
    assert [e["field"] for e in validate_credentials("nope", "12345").errors] == ["email", "password"]
    assert validate_credentials("someone@example.com", "123", check_length=False).ok


@pytest.mark.parametrize("price", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_price_is_rejected(price):
    result = validate_sweet_fields({"price": price}, partial=True)
    assert [e["field"] for e in result.errors] == ["price"]


def test_long_password_message_names_both_bounds():
    result = validate_credentials("someone@example.com", "x" * 101)
    assert result.errors == [{"field": "password", "message": "Password must be between 6 and 100 characters"}]

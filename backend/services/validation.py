"""
Pure validation for catalog and account input.

These run before anything is persisted and never touch the database. Each
returns a `ValidationResult`; callers decide whether to raise.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from email_validator import EmailNotValidError, validate_email

from core.errors import ValidationError

SWEET_CATEGORIES = (
    "Chocolate",
    "Candy",
    "Gummy",
    "Hard Candy",
    "Lollipop",
    "Toffee",
    "Caramel",
    "Other",
)

SWEET_FIELDS = ("name", "category", "price", "quantity")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 100


@dataclass
class ValidationResult:
    """Cleaned values on success, field errors on failure."""
    values: Dict[str, Any] = field(default_factory=dict)
    errors: List[Dict[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, field_name: str, message: str) -> None:
        self.errors.append({"field": field_name, "message": message})

    def raise_for_errors(self) -> Dict[str, Any]:
        if self.errors:
            raise ValidationError(self.errors[0]["message"], errors=self.errors)
        return self.values


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)


def _is_integer(v: Any) -> bool:
    if isinstance(v, bool):
        return False
    if isinstance(v, int):
        return True
    return isinstance(v, float) and v.is_integer()


def validate_sweet_fields(fields: Mapping[str, Any], partial: bool = False) -> ValidationResult:
    """
    Validate sweet fields.

    With `partial=False` all of name/category/price/quantity are required.
    With `partial=True` only the supplied keys are checked, using the same
    rules. None counts as missing. Keys outside SWEET_FIELDS are dropped.
    """
    result = ValidationResult()

    for name in SWEET_FIELDS:
        if partial and name not in fields:
            continue
        value = fields.get(name)
        if value is None:
            result.add_error(name, f"{name.capitalize()} is required")
            continue

        if name == "name":
            v = value.strip() if isinstance(value, str) else None
            if v is None or not (NAME_MIN_LENGTH <= len(v) <= NAME_MAX_LENGTH):
                result.add_error("name", "Sweet name must be between 2 and 100 characters")
            else:
                result.values["name"] = v

        elif name == "category":
            if value not in SWEET_CATEGORIES:
                result.add_error("category", "Invalid category")
            else:
                result.values["category"] = value

        elif name == "price":
            if not _is_number(value) or value < 0:
                result.add_error("price", "Price must be a non-negative number")
            else:
                result.values["price"] = float(value)

        elif name == "quantity":
            if not _is_integer(value) or value < 0:
                result.add_error("quantity", "Quantity must be a non-negative integer")
            else:
                result.values["quantity"] = int(value)

    return result


def validate_positive_quantity(quantity: Any) -> ValidationResult:
    """Purchase and restock amounts: an integer of at least 1."""
    result = ValidationResult()
    if not _is_integer(quantity) or quantity < 1:
        result.add_error("quantity", "Quantity must be at least 1")
    else:
        result.values["quantity"] = int(quantity)
    return result


def validate_credentials(email: Optional[str], password: Optional[str], check_length: bool = True) -> ValidationResult:
    result = ValidationResult()

    try:
        normalized = validate_email(email or "", check_deliverability=False).normalized
    except EmailNotValidError:
        result.add_error("email", "Valid email is required")
    else:
        result.values["email"] = normalized

    if not password:
        result.add_error("password", "Password is required")
    elif check_length and not (PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH):
        result.add_error("password", "Password must be between 6 and 100 characters")
    else:
        result.values["password"] = password

    return result

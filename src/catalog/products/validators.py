"""Field-level validation for product payloads and listing parameters.

All checks are pure and total: they never raise and never touch storage.
Each returns a :class:`ValidationResult` whose ``errors`` map a field name
to a human readable message.  When a field breaks several rules the
messages are comma-joined into one entry.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

MAX_NAME_LENGTH = 255
MAX_SKU_LENGTH = 100
MAX_SEARCH_LENGTH = 100
MIN_PRICE = Decimal("0.00")
MAX_PRICE = Decimal("999999.99")
MAX_PRICE_DECIMALS = 2
MAX_PAGE_LIMIT = 100
MAX_PAGE = 1_000_000_000
# upper bound of a BigAutoField primary key
MAX_ID = 9_223_372_036_854_775_807
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20

# Unicode letters and digits, whitespace, hyphen, underscore, period.
NAME_PATTERN = re.compile(r"[\w\s\-.]+")
SKU_PATTERN = re.compile(r"[A-Za-z0-9\-_]+")


class ValidationResult(BaseModel):
    """Outcome of a validation pass."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    errors: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_errors(cls, errors: Mapping[str, str]) -> ValidationResult:
        return cls(valid=not errors, errors=dict(errors))


def to_decimal(value: Any) -> Optional[Decimal]:
    """Coerce a number or numeric string to ``Decimal``; ``None`` if not numeric.

    Floats go through ``str`` so ``9.99`` stays ``Decimal("9.99")``.
    Booleans, NaN and infinities are not numbers here.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value)) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return None
        return number if number.is_finite() else None
    return None


def to_int(value: Any, bound: int) -> Optional[int]:
    """Integer part of a numeric value, clamped to ``[-bound, bound]``.

    Clamping happens on the ``Decimal`` so exponent notation such as
    ``"1e999999999"`` never expands into a huge integer.  ``None`` when
    the value is not numeric.
    """
    number = to_decimal(value)
    if number is None:
        return None
    return int(max(-bound, min(bound, number)))


def decimal_places(number: Decimal) -> int:
    """Digits after the decimal point, ignoring trailing zeros.

    Works on the digit tuple directly; ``Decimal.normalize`` overflows the
    default context for exponents like ``1e1000000``.
    """
    _, digits, exponent = number.as_tuple()
    if not isinstance(exponent, int) or exponent >= 0 or not any(digits):
        return 0
    places = -exponent
    for digit in reversed(digits):
        if digit != 0 or places == 0:
            break
        places -= 1
    return places


class ProductValidator:
    """Checks product fields, pagination, search terms and ids."""

    # ------------------------------------------------------------------
    # Product payload
    # ------------------------------------------------------------------

    def validate(self, data: Mapping[str, Any], is_update: bool = False) -> ValidationResult:
        """Validate a create (all required) or update (partial) payload.

        ``name`` and ``price`` are required unless ``is_update`` is set and
        the key is missing or ``None``.  ``sku`` is only checked when a
        non-null value was supplied.
        """
        errors: Dict[str, str] = {}

        if not is_update or data.get("name") is not None:
            name = data.get("name")
            messages = self._name_errors("" if name is None else name)
            if messages:
                errors["name"] = ", ".join(messages)

        if not is_update or data.get("price") is not None:
            messages = self._price_errors(data.get("price"))
            if messages:
                errors["price"] = ", ".join(messages)

        if data.get("sku") is not None:
            messages = self._sku_errors(data["sku"])
            if messages:
                errors["sku"] = ", ".join(messages)

        return ValidationResult.from_errors(errors)

    def _name_errors(self, name: Any) -> List[str]:
        if not isinstance(name, str):
            return ["Name must be a string"]

        name = name.strip()
        errors = []
        if name == "":
            errors.append("Name is required and cannot be empty")
        if len(name) > MAX_NAME_LENGTH:
            errors.append(f"Name cannot exceed {MAX_NAME_LENGTH} characters")
        if not NAME_PATTERN.fullmatch(name):
            errors.append("Name contains invalid characters")
        return errors

    def _price_errors(self, price: Any) -> List[str]:
        number = to_decimal(price)
        if number is None:
            return ["Price must be a number"]

        errors = []
        if number < MIN_PRICE:
            errors.append(f"Price cannot be less than {MIN_PRICE}")
        if number > MAX_PRICE:
            errors.append("Price seems unreasonably high")
        if decimal_places(number) > MAX_PRICE_DECIMALS:
            errors.append(f"Price can have maximum {MAX_PRICE_DECIMALS} decimal places")
        return errors

    def _sku_errors(self, sku: Any) -> List[str]:
        if not isinstance(sku, str):
            return ["SKU must be a string"]

        sku = sku.strip()
        # blank SKU is stored as NULL
        if sku == "":
            return []

        errors = []
        if len(sku) > MAX_SKU_LENGTH:
            errors.append(f"SKU cannot exceed {MAX_SKU_LENGTH} characters")
        if not SKU_PATTERN.fullmatch(sku):
            errors.append("SKU can only contain letters, numbers, hyphens, and underscores")
        return errors

    # ------------------------------------------------------------------
    # Listing parameters
    # ------------------------------------------------------------------

    def validate_pagination(self, params: Mapping[str, Any]) -> ValidationResult:
        errors: Dict[str, str] = {}

        page = params.get("page")
        page = to_int(DEFAULT_PAGE if page is None else page, MAX_PAGE)
        if page is None or page < 1:
            errors["page"] = "Page must be a positive integer"

        limit = params.get("limit")
        limit = to_int(DEFAULT_LIMIT if limit is None else limit, MAX_PAGE)
        if limit is None or not 1 <= limit <= MAX_PAGE_LIMIT:
            errors["limit"] = f"Limit must be between 1 and {MAX_PAGE_LIMIT}"

        return ValidationResult.from_errors(errors)

    def validate_search_query(self, query: Any) -> ValidationResult:
        if query is not None and not isinstance(query, str):
            return ValidationResult.from_errors({"query": "Search query must be a string"})

        if isinstance(query, str) and len(query.strip()) > MAX_SEARCH_LENGTH:
            return ValidationResult.from_errors(
                {"query": f"Search query cannot exceed {MAX_SEARCH_LENGTH} characters"}
            )

        return ValidationResult.from_errors({})

    def validate_id(self, id: Any) -> ValidationResult:
        number = to_decimal(id)
        if number is None or number > MAX_ID:
            return ValidationResult.from_errors({"id": "ID must be a number"})
        if number < 1:
            return ValidationResult.from_errors({"id": "ID must be a positive integer"})
        return ValidationResult.from_errors({})

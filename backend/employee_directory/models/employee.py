"""Employee models and payload normalization for the JSON-file directory."""

from __future__ import annotations

import math
from datetime import date
from typing import Any

from pydantic import BaseModel, Field

# JSON field names accepted from request bodies, in record order
TEXT_FIELDS: tuple[str, ...] = ("fullName", "role", "department", "email")
EDITABLE_FIELDS: tuple[str, ...] = (*TEXT_FIELDS, "salary", "hireDate")

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


class Employee(BaseModel):
    """A stored employee record, serialized with camelCase keys."""

    model_config = {"populate_by_name": True}

    id: int = Field(ge=1)
    full_name: str = Field(default="", alias="fullName")
    role: str = ""
    department: str = ""
    email: str = ""
    salary: int | float = 0
    hire_date: str = Field(default="", alias="hireDate")


class EmployeeForm(BaseModel):
    """Client-side edit form; stricter than the server, which only coerces."""

    model_config = {"populate_by_name": True, "str_strip_whitespace": True}

    full_name: str = Field(alias="fullName", min_length=3)
    role: str = Field(min_length=1)
    department: str = Field(min_length=1)
    email: str = Field(pattern=_EMAIL_PATTERN)
    salary: int | float = Field(ge=0)
    hire_date: date = Field(alias="hireDate")


def normalize_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _parse_number(text: str) -> int | float:
    """Parse numeric text the way a browser form would; 0 when it is not a number.

    Decimal and exponent forms plus 0x/0o/0b prefixes are numbers,
    digit-group underscores are not.
    """
    if not text or "_" in text:
        return 0
    try:
        return float(text)
    except ValueError:
        pass
    try:
        return int(text, 0)
    except ValueError:
        return 0


def normalize_salary(value: Any) -> int | float:
    """Coerce a salary to a non-negative number, falling back to 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        number = _parse_number(value.strip())
    else:
        return 0

    if not math.isfinite(number) or number < 0:
        return 0
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def normalize_hire_date(value: Any) -> str:
    if value is None:
        return date.today().isoformat()
    return normalize_text(value)


_NORMALIZERS = {
    "fullName": normalize_text,
    "role": normalize_text,
    "department": normalize_text,
    "email": normalize_text,
    "salary": normalize_salary,
    "hireDate": normalize_hire_date,
}


def _as_mapping(payload: Any) -> dict[str, Any]:
    return payload if isinstance(payload, dict) else {}


def normalize_create_payload(payload: Any) -> dict[str, Any]:
    """Build every editable field for a new record; missing fields get defaults."""
    data = _as_mapping(payload)
    return {key: _NORMALIZERS[key](data.get(key)) for key in EDITABLE_FIELDS}


def normalize_update_payload(payload: Any) -> dict[str, Any]:
    """Keep only the editable fields the caller supplied.

    ``None`` counts as not supplied, so a stored field never becomes null.
    Unknown keys and ``id`` are dropped.
    """
    data = _as_mapping(payload)
    return {
        key: _NORMALIZERS[key](data[key])
        for key in EDITABLE_FIELDS
        if data.get(key) is not None
    }

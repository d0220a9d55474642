"""Search and sort the employee list for display."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Literal

from employee_directory.models.employee import Employee

SortDirection = Literal["asc", "desc"]

# JSON field name -> model attribute, e.g. "fullName" -> "full_name"
_ATTRIBUTES: dict[str, str] = {
    (info.alias or name): name for name, info in Employee.model_fields.items()
}
_JSON_NAMES: dict[str, str] = {attr: json_name for json_name, attr in _ATTRIBUTES.items()}


def resolve_sort_field(field: str) -> str:
    """Return the JSON field name for ``field``, given either spelling."""
    if field in _ATTRIBUTES:
        return field
    if field in _JSON_NAMES:
        return _JSON_NAMES[field]
    raise ValueError(f"Unknown sort field: {field!r}")


def _display_text(value: Any) -> str:
    # whole-number floats read as integers, e.g. 120000.0 -> "120000"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _search_text(employee: Employee) -> str:
    values = employee.model_dump(by_alias=True).values()
    return " ".join(_display_text(value) for value in values).casefold()


def _sort_key(value: Any) -> tuple:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value, "")
    text = str(value)
    # case-insensitive first, then lowercase before uppercase
    return (1, text.casefold(), text.swapcase())


def project_employees(
    employees: Iterable[Employee],
    search_term: str = "",
    sort_field: str = "fullName",
    sort_direction: SortDirection = "asc",
) -> list[Employee]:
    """Filter ``employees`` by ``search_term`` and sort them; the input is left untouched.

    A record matches when the term appears, case-insensitively, in any of its
    field values. Records with equal sort values keep their input order in
    both directions.
    """
    if sort_direction not in ("asc", "desc"):
        raise ValueError(f"Unknown sort direction: {sort_direction!r}")
    attribute = _ATTRIBUTES[resolve_sort_field(sort_field)]

    term = search_term.strip().casefold()
    result = [employee for employee in employees if not term or term in _search_text(employee)]

    return sorted(
        result,
        key=lambda employee: _sort_key(getattr(employee, attribute)),
        reverse=sort_direction == "desc",
    )


@dataclass
class SortState:
    field: str = "fullName"
    direction: SortDirection = "asc"

    def sort_by(self, field: str) -> None:
        field = resolve_sort_field(field)
        if field == self.field:
            self.flip()
        else:
            self.field = field
            self.direction = "asc"

    def flip(self) -> None:
        self.direction = "desc" if self.direction == "asc" else "asc"

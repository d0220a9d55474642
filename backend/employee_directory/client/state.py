"""Local cache of the directory plus the open edit draft.

``DirectoryState`` mirrors the last server response. Local records change only
after the server confirms a mutation, and every change re-runs the projection
so ``displayed`` always reflects the current search and sort.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from pydantic import ValidationError

from employee_directory.client.api_client import EmployeeApiClient
from employee_directory.client.projection import SortState, project_employees
from employee_directory.core.exceptions import ApiRequestError, DraftValidationError
from employee_directory.models.employee import EDITABLE_FIELDS, Employee, EmployeeForm

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "We could not load employees. Please ensure the server is running."
CREATE_FAILED_MESSAGE = "Unable to create employee right now."
UPDATE_FAILED_MESSAGE = "Unable to update employee right now."
DELETE_FAILED_MESSAGE = "Unable to delete employee right now."

DEFAULT_SALARY = 90000


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


def _blank_values() -> dict[str, Any]:
    return {
        "fullName": "",
        "role": "",
        "department": "",
        "email": "",
        "salary": DEFAULT_SALARY,
        "hireDate": date.today().isoformat(),
    }


@dataclass
class Draft:
    """An open create/edit form."""

    values: dict[str, Any] = field(default_factory=_blank_values)
    editing: Employee | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def for_employee(cls, employee: Employee) -> Draft:
        data = employee.model_dump(by_alias=True)
        return cls(values={key: data[key] for key in EDITABLE_FIELDS}, editing=employee)

    def set(self, name: str, value: Any) -> None:
        if name not in EDITABLE_FIELDS:
            raise KeyError(name)
        self.values[name] = value

    def validate(self) -> dict[str, Any]:
        """Return the trimmed request payload or raise ``DraftValidationError``."""
        try:
            form = EmployeeForm.model_validate(self.values)
        except ValidationError as err:
            self.errors = {str(e["loc"][0]): e["msg"] for e in err.errors()}
            raise DraftValidationError(self.errors) from err
        self.errors = {}
        return form.model_dump(by_alias=True, mode="json")


class DirectoryState:
    def __init__(self, api: EmployeeApiClient | None = None) -> None:
        self.api = api or EmployeeApiClient()
        self.status = LoadStatus.IDLE
        self.employees: list[Employee] = []
        self.displayed: list[Employee] = []
        self.search_term = ""
        self.sort = SortState()
        self.draft: Draft | None = None
        self.saving = False
        self.error_message = ""
        self._deleting: set[int] = set()

    @property
    def form_visible(self) -> bool:
        return self.draft is not None

    def refresh(self) -> None:
        self.displayed = project_employees(
            self.employees,
            search_term=self.search_term,
            sort_field=self.sort.field,
            sort_direction=self.sort.direction,
        )

    async def load(self) -> None:
        if self.status is LoadStatus.LOADING:
            return

        self.status = LoadStatus.LOADING
        try:
            employees = await self.api.get_all()
        except ApiRequestError:
            logger.warning("Failed to load employees", exc_info=True)
            self.error_message = LOAD_FAILED_MESSAGE
            self.status = LoadStatus.ERRORED
            return

        self.employees = employees
        self.error_message = ""
        self.status = LoadStatus.LOADED
        self.refresh()

    def search(self, term: str) -> None:
        self.search_term = term
        self.refresh()

    def sort_by(self, field_name: str) -> None:
        self.sort.sort_by(field_name)
        self.refresh()

    def flip_sort(self) -> None:
        self.sort.flip()
        self.refresh()

    def open_create_form(self) -> Draft:
        self.draft = Draft()
        return self.draft

    def open_edit_form(self, employee: Employee) -> Draft:
        self.draft = Draft.for_employee(employee)
        return self.draft

    def close_form(self) -> None:
        self.draft = None
        self.saving = False

    async def submit_draft(self) -> Employee | None:
        """Send the open draft; returns the stored record, or None when nothing was saved."""
        if self.draft is None:
            raise RuntimeError("No employee form is open")
        if self.saving:
            logger.debug("Ignoring submit while a save is in flight")
            return None

        payload = self.draft.validate()
        editing = self.draft.editing

        self.saving = True
        try:
            if editing is not None:
                employee = await self._submit_update(editing, payload)
            else:
                employee = await self._submit_create(payload)
        finally:
            self.saving = False

        if employee is not None:
            self.refresh()
            self.close_form()
        return employee

    async def _submit_create(self, payload: dict[str, Any]) -> Employee | None:
        try:
            employee = await self.api.create(payload)
        except ApiRequestError:
            logger.warning("Failed to create employee", exc_info=True)
            self.error_message = CREATE_FAILED_MESSAGE
            return None
        self.employees = [*self.employees, employee]
        return employee

    async def _submit_update(self, editing: Employee, payload: dict[str, Any]) -> Employee | None:
        changed = Employee.model_validate({**editing.model_dump(by_alias=True), **payload})
        try:
            employee = await self.api.update(changed)
        except ApiRequestError:
            logger.warning("Failed to update employee %s", editing.id, exc_info=True)
            self.error_message = UPDATE_FAILED_MESSAGE
            return None
        self.employees = [employee if e.id == employee.id else e for e in self.employees]
        return employee

    async def delete(self, employee: Employee, confirm: Callable[[str], bool]) -> bool:
        """Delete ``employee`` once ``confirm`` approves; returns True if it was removed."""
        if employee.id in self._deleting:
            return False
        if not confirm(f"Delete {employee.full_name}? This cannot be undone."):
            return False

        self._deleting.add(employee.id)
        try:
            await self.api.delete(employee.id)
        except ApiRequestError:
            logger.warning("Failed to delete employee %s", employee.id, exc_info=True)
            self.error_message = DELETE_FAILED_MESSAGE
            return False
        finally:
            self._deleting.discard(employee.id)

        self.employees = [e for e in self.employees if e.id != employee.id]
        self.refresh()
        return True

from __future__ import annotations

from employee_directory.services.employee_store import EmployeeStore, employee_store


async def get_employee_store() -> EmployeeStore:
    return employee_store

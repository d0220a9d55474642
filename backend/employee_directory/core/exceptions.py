"""Error taxonomy shared by the record store, the API and the client state."""

from __future__ import annotations


class EmployeeDirectoryError(Exception):
    """Base class for all employee directory errors."""


class EmployeeNotFoundError(EmployeeDirectoryError):
    def __init__(self, employee_id: int | str) -> None:
        self.employee_id = employee_id
        super().__init__(f"Employee {employee_id} not found")


class StoreIOError(EmployeeDirectoryError):
    """The backing file could not be read or written.

    The file on disk is left as it was before the failing operation.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(f"{message}: {cause}" if cause else message)


class DraftValidationError(EmployeeDirectoryError):
    """A draft failed client-side validation before any request was sent."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        fields = ", ".join(sorted(errors))
        super().__init__(f"Invalid employee draft ({fields})")


class ApiRequestError(EmployeeDirectoryError):
    def __init__(self, message: str, status: int | None = None) -> None:
        self.status = status
        super().__init__(message)

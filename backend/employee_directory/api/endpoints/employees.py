from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status

from employee_directory.core.dependencies import get_employee_store
from employee_directory.core.exceptions import EmployeeNotFoundError
from employee_directory.models.employee import Employee
from employee_directory.services.employee_store import EmployeeStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


def _server_error(message: str, err: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"message": message, "error": str(err)},
    )


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Employee not found",
    )


@router.get("", response_model=list[Employee])
async def list_employees(
    store: EmployeeStore = Depends(get_employee_store),  # noqa: B008
):
    try:
        return await store.list_employees()
    except Exception as err:
        logger.exception("Failed to list employees")
        raise _server_error("Failed to read employees", err) from err


@router.post("", response_model=Employee, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: Any = Body(None),  # noqa: B008
    store: EmployeeStore = Depends(get_employee_store),  # noqa: B008
):
    try:
        return await store.create_employee(payload)
    except Exception as err:
        logger.exception("Failed to create employee")
        raise _server_error("Failed to create employee", err) from err


@router.put("/{employee_id}", response_model=Employee)
async def update_employee(
    employee_id: str,
    payload: Any = Body(None),  # noqa: B008
    store: EmployeeStore = Depends(get_employee_store),  # noqa: B008
):
    try:
        return await store.update_employee(employee_id, payload)
    except EmployeeNotFoundError as err:
        raise _not_found() from err
    except Exception as err:
        logger.exception("Failed to update employee %s", employee_id)
        raise _server_error("Failed to update employee", err) from err


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: str,
    store: EmployeeStore = Depends(get_employee_store),  # noqa: B008
):
    try:
        await store.delete_employee(employee_id)
    except EmployeeNotFoundError as err:
        raise _not_found() from err
    except Exception as err:
        logger.exception("Failed to delete employee %s", employee_id)
        raise _server_error("Failed to delete employee", err) from err

    return Response(status_code=status.HTTP_204_NO_CONTENT)

from __future__ import annotations

from fastapi import APIRouter, Depends

from employee_directory.core.config import settings
from employee_directory.core.dependencies import get_employee_store
from employee_directory.services.employee_store import EmployeeStore

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check(
    store: EmployeeStore = Depends(get_employee_store),  # noqa: B008
):
    services: dict[str, str] = {}

    if store.path is None:
        services["employee_store"] = "not_configured"
    else:
        ok = await store.check_connection()
        services["employee_store"] = "ok" if ok else "error"

    all_ok = all(v in ("ok", "not_configured") for v in services.values())

    return {
        "status": "healthy" if all_ok else "degraded",
        "version": settings.APP_VERSION,
        "services": services,
    }


@router.get("/ready")
async def readiness_check():
    return {"ready": True}

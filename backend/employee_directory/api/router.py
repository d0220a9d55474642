from fastapi import APIRouter

from employee_directory.api.endpoints import employees, health
from employee_directory.core.config import settings

api_router = APIRouter(prefix=settings.API_PREFIX)
api_router.include_router(health.router)
api_router.include_router(employees.router)

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from employee_directory.api.router import api_router
from employee_directory.core.config import settings
from employee_directory.services.employee_store import employee_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    try:
        await employee_store.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize EmployeeStore, continuing without a data file")
    yield
    await employee_store.close()


app = FastAPI(
    title="Employee Directory API",
    description="CRUD API for the employee directory, backed by a JSON file",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.exception_handler(StarletteHTTPException)
async def route_not_found_handler(request: Request, exc: StarletteHTTPException):
    # Unknown routes and unsupported methods share one generic 404
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED or (
        exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found"
    ):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "Route not found"},
        )
    return await http_exception_handler(request, exc)


@app.get("/")
async def root():
    return {"message": "Employee Directory API"}

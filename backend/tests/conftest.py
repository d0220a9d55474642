from __future__ import annotations

import json

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.testclient import TestClient

from employee_directory.core.dependencies import get_employee_store
from employee_directory.main import app
from employee_directory.models.employee import Employee
from employee_directory.services.employee_store import EmployeeStore

SAMPLE_EMPLOYEES: list[dict] = [
    {
        "id": 1,
        "fullName": "Ann Lee",
        "role": "Engineer",
        "department": "R&D",
        "email": "ann@x.com",
        "salary": 90000,
        "hireDate": "2021-03-01",
    },
    {
        "id": 2,
        "fullName": "Bob Roe",
        "role": "Designer",
        "department": "Product",
        "email": "bob@x.com",
        "salary": 50000,
        "hireDate": "2022-07-15",
    },
]


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _store_settings(tmp_path):
    from employee_directory.core.config import settings

    original_path = settings.DATA_PATH
    settings.DATA_PATH = str(tmp_path / "data" / "employees.json")
    yield
    settings.DATA_PATH = original_path


@pytest.fixture
def data_path(tmp_path):
    return tmp_path / "employees.json"


@pytest.fixture
def seeded_data_path(data_path):
    data_path.write_text(json.dumps(SAMPLE_EMPLOYEES, indent=2), encoding="utf-8")
    return data_path


@pytest.fixture
def store(data_path):
    return EmployeeStore(data_path, lock_timeout=5.0)


@pytest.fixture
def seeded_store(seeded_data_path):
    return EmployeeStore(seeded_data_path, lock_timeout=5.0)


@pytest.fixture
def sample_employees() -> list[Employee]:
    return [Employee.model_validate(item) for item in SAMPLE_EMPLOYEES]


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_client(seeded_store):
    app.dependency_overrides[get_employee_store] = lambda: seeded_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(store):
    app.dependency_overrides[get_employee_store] = lambda: store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()

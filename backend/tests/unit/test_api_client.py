from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from employee_directory.client.api_client import EmployeeApiClient
from employee_directory.core.exceptions import ApiRequestError
from employee_directory.models.employee import Employee

ANN = {
    "id": 1,
    "fullName": "Ann Lee",
    "role": "Engineer",
    "department": "R&D",
    "email": "ann@x.com",
    "salary": 120000,
    "hireDate": "2024-01-01",
}


def _mock_response(status: int, data=None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=data)
    response.text = AsyncMock(return_value=text)
    return response


def _mock_session(response: MagicMock) -> MagicMock:
    mock_request_context = AsyncMock()
    mock_request_context.__aenter__.return_value = response
    mock_request_context.__aexit__.return_value = None

    session = MagicMock()
    session.request.return_value = mock_request_context
    return session


def _mock_client_session(session: MagicMock) -> AsyncMock:
    mock_client_session = AsyncMock()
    mock_client_session.__aenter__.return_value = session
    mock_client_session.__aexit__.return_value = None
    return mock_client_session


def test_default_base_url_from_settings():
    client = EmployeeApiClient()
    assert client.employees_url == "http://localhost:4000/api/employees"


def test_base_url_trailing_slash_is_trimmed():
    client = EmployeeApiClient("http://example.test/api/")
    assert client.employees_url == "http://example.test/api/employees"


@pytest.mark.anyio
async def test_get_all_parses_employees():
    session = _mock_session(_mock_response(200, [ANN]))

    with patch(
        "employee_directory.client.api_client.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        employees = await EmployeeApiClient("http://example.test/api").get_all()

    assert employees == [Employee.model_validate(ANN)]
    session.request.assert_called_once_with("GET", "http://example.test/api/employees", json=None)


@pytest.mark.anyio
async def test_create_posts_payload():
    session = _mock_session(_mock_response(201, ANN))
    payload = {key: value for key, value in ANN.items() if key != "id"}

    with patch(
        "employee_directory.client.api_client.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        employee = await EmployeeApiClient("http://example.test/api").create(payload)

    assert employee.id == 1
    assert session.request.call_args.args == ("POST", "http://example.test/api/employees")
    assert session.request.call_args.kwargs["json"] == payload


@pytest.mark.anyio
async def test_update_puts_full_record():
    session = _mock_session(_mock_response(200, {**ANN, "role": "Lead"}))
    employee = Employee.model_validate({**ANN, "role": "Lead"})

    with patch(
        "employee_directory.client.api_client.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        result = await EmployeeApiClient("http://example.test/api").update(employee)

    assert result.role == "Lead"
    assert session.request.call_args.args == ("PUT", "http://example.test/api/employees/1")
    assert session.request.call_args.kwargs["json"]["fullName"] == "Ann Lee"


@pytest.mark.anyio
async def test_delete_accepts_no_content():
    response = _mock_response(204)
    session = _mock_session(response)

    with patch(
        "employee_directory.client.api_client.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        assert await EmployeeApiClient("http://example.test/api").delete(1) is None

    response.json.assert_not_awaited()


@pytest.mark.anyio
async def test_error_status_raises_api_error():
    session = _mock_session(_mock_response(404, text='{"detail":"Employee not found"}'))

    with patch(
        "employee_directory.client.api_client.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        with pytest.raises(ApiRequestError) as exc_info:
            await EmployeeApiClient("http://example.test/api").delete(9)

    assert exc_info.value.status == 404


@pytest.mark.anyio
async def test_transport_error_raises_api_error():
    session = MagicMock()
    session.request.side_effect = aiohttp.ClientConnectionError("refused")

    with patch(
        "employee_directory.client.api_client.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        with pytest.raises(ApiRequestError) as exc_info:
            await EmployeeApiClient("http://example.test/api").get_all()

    assert exc_info.value.status is None


@pytest.mark.anyio
async def test_malformed_response_raises_api_error():
    session = _mock_session(_mock_response(200, {"unexpected": True}))

    with patch(
        "employee_directory.client.api_client.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        with pytest.raises(ApiRequestError):
            await EmployeeApiClient("http://example.test/api").get_all()

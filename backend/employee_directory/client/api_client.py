from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from employee_directory.core.config import settings
from employee_directory.core.exceptions import ApiRequestError
from employee_directory.models.employee import Employee

logger = logging.getLogger(__name__)


class EmployeeApiClient:
    """Thin aiohttp client for the employee REST endpoints."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None) -> None:
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self.timeout = timeout or settings.CLIENT_TIMEOUT

    @property
    def employees_url(self) -> str:
        return f"{self.base_url}/employees"

    async def get_all(self) -> list[Employee]:
        data = await self._request("GET", self.employees_url)
        if not isinstance(data, list):
            raise ApiRequestError("Expected a list of employees")
        return [self._parse(item) for item in data]

    async def create(self, payload: dict[str, Any]) -> Employee:
        data = await self._request("POST", self.employees_url, json=payload)
        return self._parse(data)

    async def update(self, employee: Employee) -> Employee:
        url = f"{self.employees_url}/{employee.id}"
        data = await self._request("PUT", url, json=employee.model_dump(by_alias=True))
        return self._parse(data)

    async def delete(self, employee_id: int) -> None:
        await self._request("DELETE", f"{self.employees_url}/{employee_id}")

    async def _request(self, method: str, url: str, json: Any = None) -> Any:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(method, url, json=json) as response:
                    if response.status >= 400:
                        error_text = await response.text()
                        raise ApiRequestError(
                            f"{method} {url} failed: {response.status} - {error_text}",
                            status=response.status,
                        )
                    if response.status == 204:
                        return None
                    return await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            logger.warning("%s %s failed: %s", method, url, err)
            raise ApiRequestError(f"{method} {url} failed: {err}") from err

    @staticmethod
    def _parse(data: Any) -> Employee:
        try:
            return Employee.model_validate(data)
        except ValidationError as err:
            raise ApiRequestError(f"Malformed employee in response: {err}") from err

"""JSON-file employee store with serialized read-modify-write mutations."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
import tempfile
import threading
from collections.abc import Callable
from functools import partial
from pathlib import Path
from typing import Any, TypeVar

from pydantic import ValidationError

from employee_directory.core.config import Settings
from employee_directory.core.exceptions import EmployeeNotFoundError, StoreIOError
from employee_directory.models.employee import (
    Employee,
    normalize_create_payload,
    normalize_update_payload,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Records indexed by id, in file order
Records = dict[int, Employee]


def _find_key(records: Records, employee_id: int | str) -> int:
    wanted = str(employee_id)
    for key in records:
        if str(key) == wanted:
            return key
    raise EmployeeNotFoundError(employee_id)


class EmployeeStore:
    """Durable employee collection backed by a single pretty-printed JSON array.

    Every mutation reads the whole file, changes it in memory and writes it back
    while holding the store lock. Writes land in a temporary file that replaces
    the data file in one ``os.replace``, so readers never see a partial write.
    """

    def __init__(self, path: Path | str | None = None, lock_timeout: float = 10.0) -> None:
        self.path: Path | None = Path(path) if path else None
        self.lock_timeout = lock_timeout
        self.initialized: bool = False
        self._lock = threading.RLock()
        self._high_water_id = 0

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        self.path = Path(settings.DATA_PATH).expanduser()
        self.lock_timeout = settings.STORE_LOCK_TIMEOUT
        await asyncio.to_thread(self._ensure_file, self.path)
        self.initialized = True
        logger.info("EmployeeStore initialized (path=%s)", self.path)

    async def close(self) -> None:
        self.path = None
        self.initialized = False
        self._high_water_id = 0

    async def list_employees(self) -> list[Employee]:
        records = await asyncio.to_thread(self._read)
        return list(records.values())

    async def create_employee(self, payload: Any) -> Employee:
        fields = normalize_create_payload(payload)
        return await asyncio.to_thread(self._mutate, partial(self._apply_create, fields))

    async def update_employee(self, employee_id: int | str, payload: Any) -> Employee:
        fields = normalize_update_payload(payload)
        return await asyncio.to_thread(
            self._mutate, partial(self._apply_update, employee_id, fields)
        )

    async def delete_employee(self, employee_id: int | str) -> None:
        await asyncio.to_thread(self._mutate, partial(self._apply_delete, employee_id))

    async def check_connection(self) -> bool:
        try:
            await asyncio.to_thread(self._read)
            return True
        except StoreIOError:
            logger.exception("Employee store check failed")
            return False

    # Mutations below run inside _mutate, with the lock held

    def _apply_create(self, fields: dict[str, Any], records: Records) -> Employee:
        next_id = self._high_water_id + 1
        employee = Employee.model_validate({"id": next_id, **fields})
        records[next_id] = employee
        self._high_water_id = next_id
        logger.info("Created employee %s", next_id)
        return employee

    def _apply_update(
        self, employee_id: int | str, fields: dict[str, Any], records: Records
    ) -> Employee:
        key = _find_key(records, employee_id)
        current = records[key].model_dump(by_alias=True)
        employee = Employee.model_validate({**current, **fields})
        records[key] = employee
        logger.info("Updated employee %s (%s)", key, ", ".join(fields) or "no fields")
        return employee

    def _apply_delete(self, employee_id: int | str, records: Records) -> None:
        key = _find_key(records, employee_id)
        del records[key]
        logger.info("Deleted employee %s", key)

    def _mutate(self, mutation: Callable[[Records], T]) -> T:
        if not self._lock.acquire(timeout=self.lock_timeout):
            raise StoreIOError("Timed out waiting for the employee store lock")
        try:
            records = self._read()
            # every id seen in the file counts, so deleting one never frees it
            self._high_water_id = max(self._high_water_id, max(records, default=0))
            result = mutation(records)
            self._write(records)
            return result
        finally:
            self._lock.release()

    def _require_path(self) -> Path:
        if self.path is None:
            raise StoreIOError("EmployeeStore not initialized")
        return self.path

    def _ensure_file(self, path: Path) -> None:
        if path.exists():
            return
        if not self._lock.acquire(timeout=self.lock_timeout):
            raise StoreIOError("Timed out waiting for the employee store lock")
        try:
            if not path.exists():
                path.parent.mkdir(parents=True, exist_ok=True)
                self._replace_contents(path, "[]")
                logger.info("Created empty employee file at %s", path)
        except OSError as err:
            raise StoreIOError(f"Failed to create {path}", err) from err
        finally:
            self._lock.release()

    def _read(self) -> Records:
        path = self._require_path()
        self._ensure_file(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as err:
            raise StoreIOError(f"Failed to read {path}", err) from err

        if not isinstance(raw, list):
            raise StoreIOError(f"Expected a JSON array in {path}")

        try:
            employees = [Employee.model_validate(item) for item in raw]
        except ValidationError as err:
            raise StoreIOError(f"Invalid employee record in {path}", err) from err

        records: Records = {}
        for employee in employees:
            records[employee.id] = employee
        return records

    def _write(self, records: Records) -> None:
        path = self._require_path()
        data = [employee.model_dump(by_alias=True) for employee in records.values()]
        try:
            self._replace_contents(path, json.dumps(data, indent=2, ensure_ascii=False))
        except OSError as err:
            raise StoreIOError(f"Failed to write {path}", err) from err

    @staticmethod
    def _replace_contents(path: Path, text: str) -> None:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except OSError:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise


employee_store = EmployeeStore()

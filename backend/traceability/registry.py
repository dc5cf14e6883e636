from __future__ import annotations

import threading
from collections import defaultdict
from typing import Protocol

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from db.models import CatchRecord


class CodeRegistry(Protocol):
    def code_exists(self, haul_id: str, code: str) -> bool:
        ...

    def count_codes(self, haul_id: str) -> int:
        ...


class SqlCodeRegistry:
    """Registry over persisted catch records. Codes are unique across all hauls."""

    def __init__(self, db: Session):
        self._db = db

    def code_exists(self, haul_id: str, code: str) -> bool:
        stmt = select(CatchRecord.id).where(CatchRecord.qr_code == code).limit(1)
        return self._db.scalar(stmt) is not None

    def count_codes(self, haul_id: str) -> int:
        stmt = select(func.count(CatchRecord.id)).where(CatchRecord.haul_id == haul_id)
        return int(self._db.scalar(stmt) or 0)


class InMemoryCodeRegistry:
    def __init__(self):
        self._codes: dict[str, set[str]] = defaultdict(set)
        self._lock = threading.Lock()

    def add(self, haul_id: str, code: str) -> None:
        with self._lock:
            self._codes[haul_id].add(code)

    def code_exists(self, haul_id: str, code: str) -> bool:
        with self._lock:
            return code in self._codes.get(haul_id, ())

    def count_codes(self, haul_id: str) -> int:
        with self._lock:
            return len(self._codes.get(haul_id, ()))

from __future__ import annotations

from common.config import DATA_DIR
from db.database import Base, engine
from db import models  # noqa: F401 - ensure metadata is registered


def init_db() -> None:
    if engine.url.get_backend_name() == "sqlite":
        DATA_DIR.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=engine)

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from db.database import Base


class CatchRecord(Base):
    __tablename__ = "catch_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    haul_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    qr_code: Mapped[str] = mapped_column(String(32), unique=True, nullable=False, index=True)
    species_code: Mapped[str] = mapped_column(String(64), nullable=False)
    species_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    zone_label: Mapped[str] = mapped_column(String(255), nullable=False)
    zone_source: Mapped[str] = mapped_column(String(32), nullable=False)
    zone_code: Mapped[str | None] = mapped_column(String(32), nullable=True)
    seaport_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    region_code: Mapped[str] = mapped_column(String(1), nullable=False)
    grid_cell_code: Mapped[str] = mapped_column(String(8), nullable=False)

    distance_cm: Mapped[float | None] = mapped_column(Float, nullable=True)
    length_cm: Mapped[float | None] = mapped_column(Float, nullable=True)
    girth_cm: Mapped[float | None] = mapped_column(Float, nullable=True)
    weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    measurement_confidence: Mapped[float | None] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

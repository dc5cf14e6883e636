"""Tests for the SQL and in-memory code registries."""
from __future__ import annotations

from sqlalchemy.orm import Session

from db.models import CatchRecord
from traceability import InMemoryCodeRegistry, SqlCodeRegistry


def _record(haul_id: str, code: str) -> CatchRecord:
    return CatchRecord(
        haul_id=haul_id,
        qr_code=code,
        species_code="SNP",
        latitude=21.0,
        longitude=107.0,
        zone_label="V11",
        zone_source="grid_fallback",
        region_code="C",
        grid_cell_code="V11",
    )


class TestSqlCodeRegistry:
    def test_counts_codes_per_haul(self, db_session: Session):
        db_session.add_all([
            _record("haul-1", "SNP010100070101"),
            _record("haul-1", "SNP010100070102"),
            _record("haul-2", "SNP010101070101"),
        ])
        db_session.commit()

        registry = SqlCodeRegistry(db_session)
        assert registry.count_codes("haul-1") == 2
        assert registry.count_codes("haul-2") == 1
        assert registry.count_codes("haul-3") == 0

    def test_existence_is_global(self, db_session: Session):
        db_session.add(_record("haul-1", "SNP010100070101"))
        db_session.commit()

        registry = SqlCodeRegistry(db_session)
        assert registry.code_exists("haul-1", "SNP010100070101")
        assert registry.code_exists("other-haul", "SNP010100070101")
        assert not registry.code_exists("haul-1", "SNP010100070102")


class TestInMemoryCodeRegistry:
    def test_scoped_per_haul(self):
        registry = InMemoryCodeRegistry()
        registry.add("haul-1", "A")
        registry.add("haul-1", "B")

        assert registry.count_codes("haul-1") == 2
        assert registry.code_exists("haul-1", "A")
        assert not registry.code_exists("haul-2", "A")
        assert registry.count_codes("haul-2") == 0

"""Shared test fixtures for backend tests.

Uses an in-memory SQLite database so tests run without a database server,
and a scripted zone lookup so tests run without the seaport service.
"""
from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from db.database import Base, get_db
from db import models  # noqa: F401 - ensure metadata is registered
from traceability import HaulContext
from zones import InMemoryZoneCache, ZoneResolver


# ---------- Database fixtures ----------

@pytest.fixture()
def db_engine():
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session(db_engine):
    TestSession = sessionmaker(bind=db_engine, autocommit=False, autoflush=False, class_=Session)
    session = TestSession()
    try:
        yield session
    finally:
        session.close()


# ---------- Domain fixtures ----------

@pytest.fixture()
def fake_clock():
    from tests.fakes import FakeClock

    return FakeClock()


@pytest.fixture()
def fake_lookup():
    from tests.fakes import FakeZoneLookup

    return FakeZoneLookup()


@pytest.fixture()
def zone_cache(fake_clock) -> InMemoryZoneCache:
    return InMemoryZoneCache(ttl_seconds=900, clock=fake_clock)


@pytest.fixture()
def resolver(fake_lookup, zone_cache, fake_clock) -> ZoneResolver:
    return ZoneResolver(
        lookup=fake_lookup,
        cache=zone_cache,
        timeout_seconds=0.5,
        cooldown_seconds=30,
        clock=fake_clock,
    )


@pytest.fixture()
def haul() -> HaulContext:
    return HaulContext(
        haul_id="haul-1",
        haul_number=0,
        trip_code="TRIP-0101",
        species_code="snp",
        capture_date=date(2025, 7, 1),
    )


# ---------- FastAPI test client ----------

@pytest.fixture()
def client(db_session: Session, resolver: ZoneResolver, monkeypatch):
    """TestClient for api.app backed by in-memory SQLite and the scripted resolver."""
    import api

    monkeypatch.setattr(api, "init_db", lambda: None)
    api.limiter.reset()

    def _override_get_db():
        try:
            yield db_session
        finally:
            pass  # session lifetime managed by the db_session fixture

    api.app.dependency_overrides[get_db] = _override_get_db
    api.app.dependency_overrides[api.get_resolver] = lambda: resolver

    with TestClient(api.app) as c:
        yield c

    api.app.dependency_overrides.clear()

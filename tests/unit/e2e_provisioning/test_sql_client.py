# -*- coding: utf-8 -*-
"""Tests for e2e_provisioning.sql_client against in-memory SQLite."""

# Third-Party
import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool

# First-Party
from e2e_provisioning.provisioners.users import build_batch_insert
from e2e_provisioning.schemas import Profile
from e2e_provisioning.sql_client import SQLClient


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    with engine.begin() as conn:
        conn.execute(text("create table users (id text primary key, name text not null, email text not null, role text not null)"))
    yield engine
    engine.dispose()


def _rows(engine):
    with engine.connect() as conn:
        return conn.execute(text("select id, name, email, role from users order by name")).all()


def test_requires_url_or_engine():
    with pytest.raises(ValueError):
        SQLClient()


@pytest.mark.asyncio
async def test_batch_insert_with_bound_parameters(engine):
    profiles = [
        Profile(id="u1", name="Alice", email="alice@example.com"),
        Profile(id="u2", name="O'Brien", email="obrien@example.com", role="admin"),
    ]
    statement, params = build_batch_insert(profiles)

    result = await SQLClient(engine=engine).execute(statement, params)

    assert result == {"rowcount": 2}
    assert _rows(engine) == [("u1", "Alice", "alice@example.com", "user"), ("u2", "O'Brien", "obrien@example.com", "admin")]


@pytest.mark.asyncio
async def test_failed_batch_inserts_nothing(engine):
    profiles = [
        Profile(id="dup", name="One", email="one@example.com"),
        Profile(id="dup", name="Two", email="two@example.com"),
    ]
    statement, params = build_batch_insert(profiles)

    with pytest.raises(IntegrityError):
        await SQLClient(engine=engine).execute(statement, params)

    assert _rows(engine) == []

"""Tests for in-memory login sessions"""
import asyncio
import itertools
from datetime import timedelta

import pytest

from app.sessions import SessionManager, generate_token


def make_manager(clock, timeout=timedelta(days=365)):
    counter = itertools.count(1)
    return SessionManager(timeout=timeout, clock=clock, token_factory=lambda: f"token-{next(counter)}")


def test_generate_token_is_256_bit_hex():
    token = generate_token()

    assert len(token) == 64
    int(token, 16)
    assert generate_token() != token


@pytest.mark.asyncio
async def test_create_then_get_session(clock):
    manager = make_manager(clock)

    token = await manager.create_session(42)
    session = await manager.get_session(token)

    assert token == "token-1"
    assert session.user_id == 42
    assert session.token == token
    assert session.created_at == clock.now
    assert session.last_accessed == clock.now


@pytest.mark.asyncio
async def test_get_unknown_or_empty_token(clock):
    manager = make_manager(clock)

    assert await manager.get_session("missing") is None
    assert await manager.get_session(None) is None
    assert await manager.get_session("") is None


@pytest.mark.asyncio
async def test_get_session_slides_expiry(clock):
    manager = make_manager(clock, timeout=timedelta(days=10))
    token = await manager.create_session(1)
    created_at = clock.now

    clock.advance(timedelta(days=9))
    session = await manager.get_session(token)
    assert session is not None
    assert session.last_accessed == clock.now
    assert session.created_at == created_at

    # 18 days after creation, but only 9 after the last access
    clock.advance(timedelta(days=9))
    assert await manager.get_session(token) is not None


@pytest.mark.asyncio
async def test_expiry_boundary_is_exclusive(clock):
    manager = make_manager(clock, timeout=timedelta(days=10))
    token = await manager.create_session(1)

    clock.advance(timedelta(days=10))
    assert await manager.get_session(token) is not None

    clock.advance(timedelta(days=10, microseconds=1))
    assert await manager.get_session(token) is None


@pytest.mark.asyncio
async def test_expired_session_is_removed_on_lookup(clock):
    manager = make_manager(clock)
    token = await manager.create_session(1)
    await manager.create_session(2)
    assert len(manager) == 2

    clock.advance(timedelta(days=366))

    assert await manager.get_session(token) is None
    assert len(manager) == 1
    assert token not in manager


@pytest.mark.asyncio
async def test_delete_session(clock):
    manager = make_manager(clock)
    token = await manager.create_session(1)

    await manager.delete_session(token)

    assert await manager.get_session(token) is None
    assert len(manager) == 0


@pytest.mark.asyncio
async def test_delete_unknown_session_is_noop(clock):
    manager = make_manager(clock)
    await manager.create_session(1)

    await manager.delete_session("missing")
    await manager.delete_session(None)

    assert len(manager) == 1


@pytest.mark.asyncio
async def test_sweep_expired_removes_only_stale_sessions(clock):
    manager = make_manager(clock, timeout=timedelta(hours=1))
    stale = await manager.create_session(1)
    clock.advance(timedelta(minutes=40))
    fresh = await manager.create_session(2)
    clock.advance(timedelta(minutes=30))

    removed = await manager.sweep_expired()

    assert removed == 1
    assert stale not in manager
    assert fresh in manager


@pytest.mark.asyncio
async def test_sweep_with_nothing_expired(clock):
    manager = make_manager(clock)
    await manager.create_session(1)

    assert await manager.sweep_expired() == 0
    assert len(manager) == 1


@pytest.mark.asyncio
async def test_concurrent_get_and_delete_do_not_resurrect(clock):
    manager = make_manager(clock)
    token = await manager.create_session(1)

    await asyncio.gather(
        manager.get_session(token),
        manager.delete_session(token),
        manager.get_session(token),
        manager.delete_session(token),
    )

    assert await manager.get_session(token) is None
    assert len(manager) == 0


@pytest.mark.asyncio
async def test_login_scenario_with_mocked_clock(clock):
    manager = make_manager(clock)
    token = await manager.create_session(7)

    clock.advance(timedelta(days=200))
    session = await manager.get_session(token)
    assert session is not None
    assert session.last_accessed == clock.now

    clock.advance(timedelta(days=366))
    assert await manager.get_session(token) is None

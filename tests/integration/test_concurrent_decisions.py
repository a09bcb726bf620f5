"""Concurrent decisions on one change request: exactly one wins, the task moves once.

Each reviewer runs in its own session, as two API requests would.
"""

import asyncio

import pytest
from sqlalchemy import select

from app.domain.exceptions import ChangeRequestConflictException
from app.infrastructure.persistence.models import Task, TaskChangeRequest


async def _decide(session_factory, service_factory, identity, request_id, decision):
    async with session_factory() as session:
        processor = service_factory(session).processor
        try:
            result = await processor.apply_decision(identity, request_id, decision)
        except ChangeRequestConflictException as exc:
            await session.rollback()
            return exc
        await session.commit()
        return result


async def _race(session_factory, service_factory, seed):
    """Submit a CREATE as a standard member, then approve and reject it concurrently."""
    async with session_factory() as session:
        created = await service_factory(session).requests.request_create(
            seed.fin_standard, title="Contested"
        )
        await session.commit()

    outcomes = await asyncio.gather(
        _decide(session_factory, service_factory, seed.fin_supervisor, created.id, "APPROVED"),
        _decide(session_factory, service_factory, seed.fin_supervisor, created.id, "REJECTED"),
    )

    async with session_factory() as session:
        request = await session.get(TaskChangeRequest, created.id)
        tasks = (
            await session.execute(select(Task).where(Task.title == "Contested"))
        ).scalars().all()
    return outcomes, request, tasks


def _assert_single_winner(outcomes, request, tasks) -> None:
    conflicts = [o for o in outcomes if isinstance(o, ChangeRequestConflictException)]
    winners = [o for o in outcomes if not isinstance(o, ChangeRequestConflictException)]
    assert len(conflicts) == 1
    assert len(winners) == 1
    assert request.status == winners[0].status
    if winners[0].status == "APPROVED":
        assert len(tasks) == 1
        assert request.task_id == tasks[0].id
    else:
        assert tasks == []
        assert request.task_id is None


async def test_concurrent_decisions_sqlite(session_factory, service_factory, seed) -> None:
    _assert_single_winner(*await _race(session_factory, service_factory, seed))


@pytest.mark.requires_db
async def test_concurrent_decisions_postgres(pg_session_factory, service_factory, seed_factory) -> None:
    async with pg_session_factory() as session:
        pg_seed = await seed_factory(session)
        await session.commit()
    _assert_single_winner(*await _race(pg_session_factory, service_factory, pg_seed))

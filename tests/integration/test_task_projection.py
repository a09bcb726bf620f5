"""Read-side queries: unit tasks, own requests, pending reviews and unit members."""

import pytest

from app.domain.exceptions import AuthorizationException, ValidationException


async def test_tasks_are_scoped_to_unit_and_assignment(services, db_session, seed) -> None:
    mine = await services.requests.request_create(
        seed.fin_supervisor, title="Mine", assigned_to_user_id=seed.fin_standard.user_id
    )
    other = await services.requests.request_create(
        seed.fin_supervisor, title="Colleague's", assigned_to_user_id=seed.fin_colleague.user_id
    )
    unassigned = await services.requests.request_create(seed.fin_supervisor, title="Open")
    await services.requests.request_create(seed.ops_supervisor, title="Ops work")
    await db_session.commit()

    supervisor_view = await services.queries.list_tasks(seed.fin_supervisor)
    assert {t.id for t in supervisor_view} == {mine.task_id, other.task_id, unassigned.task_id}

    standard_view = await services.queries.list_tasks(seed.fin_standard)
    assert [t.id for t in standard_view] == [mine.task_id]
    row = standard_view[0]
    assert row.unit_code == "FIN"
    assert row.unit_name == "Finance"
    assert row.created_by_name == "Fiona Supervisor"
    assert row.approved_by_name == "Fiona Supervisor"
    assert row.assigned_to_name == "Frank Standard"

    ops_view = await services.queries.list_tasks(seed.ops_standard)
    assert ops_view == []


async def test_own_requests_newest_first_with_status_filter(services, db_session, seed) -> None:
    first = await services.requests.request_create(seed.fin_standard, title="First")
    second = await services.requests.request_create(seed.fin_standard, title="Second")
    await services.requests.request_create(seed.fin_colleague, title="Not mine")
    await db_session.commit()
    await services.processor.apply_decision(seed.fin_supervisor, first.id, "REJECTED")
    await db_session.commit()

    own = await services.queries.list_own_requests(seed.fin_standard)
    assert [r.id for r in own] == [second.id, first.id]
    assert own[1].reviewed_by_name == "Fiona Supervisor"
    assert own[1].task_title == "First"

    rejected = await services.queries.list_own_requests(seed.fin_standard, status="rejected")
    assert [r.id for r in rejected] == [first.id]

    with pytest.raises(ValidationException):
        await services.queries.list_own_requests(seed.fin_standard, status="DONE")


async def test_pending_reviews_oldest_first_from_standard_members(services, db_session, seed) -> None:
    task = await services.requests.request_create(seed.fin_supervisor, title="Existing")
    first = await services.requests.request_update(
        seed.fin_standard, task.task_id, {"priority": "HIGH"}
    )
    second = await services.requests.request_completion(seed.fin_colleague, task.task_id)
    await services.requests.request_create(seed.ops_standard, title="Other unit")
    await db_session.commit()

    pending = await services.queries.list_pending_reviews(seed.fin_supervisor)
    assert [p.id for p in pending] == [first.id, second.id]
    assert pending[0].task_title == "Existing"
    assert pending[0].payload == {"priority": "HIGH"}
    assert {p.unit_code for p in pending} == {"FIN"}


async def test_pending_reviews_require_approve_permission(services, db_session, seed) -> None:
    with pytest.raises(AuthorizationException):
        await services.queries.list_pending_reviews(seed.fin_standard)


async def test_unit_users_lists_active_members(services, db_session, seed) -> None:
    users = await services.queries.list_unit_users(seed.fin_standard)
    assert [u.full_name for u in users] == [
        "Carla Colleague",
        "Fiona Supervisor",
        "Frank Standard",
    ]
    roles = {u.full_name: u.role for u in users}
    assert roles["Fiona Supervisor"] == "SUPERVISOR"
    assert roles["Frank Standard"] == "STANDARD"

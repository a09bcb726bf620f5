"""Repository and catalog integration tests against the SQLite test database."""

from datetime import UTC

import pytest
from sqlalchemy import select

from app.domain.enums import ChangeRequestStatus, Role
from app.domain.exceptions import DuplicateResourceException
from app.domain.permissions import DEFAULT_ROLE_PERMISSIONS
from app.infrastructure.exceptions import PersistenceException
from app.infrastructure.persistence.models import RolePermission
from app.infrastructure.persistence.repositories import (
    ChangeRequestRepository,
    OrganizationalUnitRepository,
    RoleRepository,
    TaskRepository,
)
from app.infrastructure.services import CatalogInitializationService, PermissionResolver
from app.shared.utils.datetime import utc_now


async def test_unit_lookup_by_name_and_code(db_session, seed) -> None:
    repo = OrganizationalUnitRepository(db_session)
    assert (await repo.get_by_name("finance")).id == seed.finance_id
    assert (await repo.get_by_code("OPS")).id == seed.operations_id
    assert await repo.get_by_name("Marketing") is None


async def test_duplicate_unit_code_is_duplicate_resource(db_session, seed) -> None:
    repo = OrganizationalUnitRepository(db_session)
    with pytest.raises(DuplicateResourceException):
        await repo.create("Finance Two", "FIN")
    await db_session.rollback()


async def test_catalog_initialization_is_idempotent(db_session, seed) -> None:
    role_map = await CatalogInitializationService(db_session).initialize_catalog()
    await db_session.commit()
    assert role_map == seed.role_ids
    grants = (await db_session.execute(select(RolePermission.id))).all()
    assert len(grants) == sum(len(codes) for codes in DEFAULT_ROLE_PERMISSIONS.values())
    assert await RoleRepository(db_session).get_id_by_code("SUPERVISOR") == seed.role_ids["SUPERVISOR"]


async def test_permission_resolver_follows_role(db_session, seed) -> None:
    resolver = PermissionResolver(db_session)
    supervisor = await resolver.get_user_permissions(seed.fin_supervisor.user_id)
    standard = await resolver.get_user_permissions(seed.fin_standard.user_id)
    assert supervisor == {c.value for c in DEFAULT_ROLE_PERMISSIONS[Role.SUPERVISOR]}
    assert standard == {c.value for c in DEFAULT_ROLE_PERMISSIONS[Role.STANDARD]}
    assert await resolver.get_user_permissions(seed.fin_inactive_id) == set()
    assert await resolver.get_user_permissions("unknown-user") == set()


async def test_task_update_fields_whitelist(db_session, seed) -> None:
    repo = TaskRepository(db_session)
    task = await repo.create(
        unit_id=seed.finance_id,
        title="Audit",
        status="PENDING",
        priority="MEDIUM",
        created_by_user_id=seed.fin_supervisor.user_id,
        approved_by_user_id=seed.fin_supervisor.user_id,
    )
    with pytest.raises(ValueError):
        await repo.update_fields(task.id, {"organizational_unit_id": seed.operations_id})
    updated = await repo.update_fields(task.id, {"title": "Audit 2", "is_active": False})
    assert updated.title == "Audit 2"
    assert await repo.get_active_by_id(task.id) is None
    assert await repo.update_fields(task.id, {"title": "Audit 3"}) is None
    assert (await repo.get_by_id(task.id)).title == "Audit 2"


async def test_claim_pending_succeeds_once(db_session, seed) -> None:
    repo = ChangeRequestRepository(db_session)
    created = await repo.create(
        unit_id=seed.finance_id,
        requested_by_user_id=seed.fin_standard.user_id,
        change_type="CREATE",
        payload={"title": "Audit", "priority": "MEDIUM"},
    )
    claim = dict(
        reviewed_by_user_id=seed.fin_supervisor.user_id,
        reviewed_at=utc_now(),
        review_comment=None,
    )
    assert await repo.claim_pending(created.id, status=ChangeRequestStatus.APPROVED, **claim)
    assert not await repo.claim_pending(created.id, status=ChangeRequestStatus.REJECTED, **claim)
    locked = await repo.get_for_update(created.id)
    assert locked.status == "APPROVED"
    assert locked.reviewed_by_user_id == seed.fin_supervisor.user_id


async def test_foreign_key_violation_is_persistence_error(db_session, seed) -> None:
    repo = TaskRepository(db_session)
    with pytest.raises(PersistenceException) as exc_info:
        await repo.create(
            unit_id="no-such-unit",
            title="Orphan",
            status="PENDING",
            priority="MEDIUM",
            created_by_user_id=seed.fin_supervisor.user_id,
            approved_by_user_id=seed.fin_supervisor.user_id,
        )
    assert exc_info.value.error_code == "PERSISTENCE_ERROR"
    await db_session.rollback()


async def test_task_timestamps_are_utc_aware(db_session, seed) -> None:
    repo = TaskRepository(db_session)
    task = await repo.create(
        unit_id=seed.finance_id,
        title="Audit",
        status="PENDING",
        priority="MEDIUM",
        created_by_user_id=seed.fin_supervisor.user_id,
        approved_by_user_id=seed.fin_supervisor.user_id,
    )
    assert task.created_at.tzinfo == UTC
    assert task.updated_at.tzinfo == UTC
    (view,) = await repo.list_visible(seed.finance_id)
    assert view.created_at.tzinfo == UTC
    assert view.updated_at.tzinfo == UTC
    await db_session.rollback()

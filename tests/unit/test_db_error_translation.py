"""translate_db_errors: which driver errors surface as Duplicate vs Persistence."""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.domain.exceptions import DuplicateResourceException
from app.infrastructure.exceptions import PersistenceException
from app.infrastructure.persistence.repositories.base import translate_db_errors


class _DriverError(Exception):
    def __init__(self, message: str, sqlstate: str | None = None) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


def _integrity(message: str, sqlstate: str | None = None) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, _DriverError(message, sqlstate))


@pytest.mark.parametrize(
    "error",
    [
        _integrity("duplicate key value violates unique constraint", "23505"),
        _integrity("UNIQUE constraint failed: organizational_unit.code"),
    ],
)
def test_unique_violation_on_insert_is_duplicate(error: IntegrityError) -> None:
    with pytest.raises(DuplicateResourceException) as exc_info:
        with translate_db_errors("create organizational_unit", "organizational_unit"):
            raise error
    assert exc_info.value.error_code == "DUPLICATE_RESOURCE"


@pytest.mark.parametrize(
    "error",
    [
        _integrity("insert or update violates foreign key constraint", "23503"),
        _integrity("FOREIGN KEY constraint failed"),
        _integrity("new row violates check constraint ck_task_status", "23514"),
        _integrity("NOT NULL constraint failed: task.title"),
    ],
)
def test_other_integrity_errors_are_persistence_failures(error: IntegrityError) -> None:
    with pytest.raises(PersistenceException) as exc_info:
        with translate_db_errors("create task", "task"):
            raise error
    assert exc_info.value.details["operation"] == "create task"


def test_unique_violation_outside_insert_is_persistence_failure() -> None:
    with pytest.raises(PersistenceException):
        with translate_db_errors("update task"):
            raise _integrity("UNIQUE constraint failed: task.id")


def test_operational_error_is_persistence_failure() -> None:
    with pytest.raises(PersistenceException) as exc_info:
        with translate_db_errors("list tasks"):
            raise OperationalError("SELECT ...", {}, _DriverError("connection lost"))
    assert exc_info.value.details == {"operation": "list tasks", "reason": "OperationalError"}

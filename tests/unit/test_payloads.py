"""Payload building and structural validation for change request submissions."""

from datetime import date

import pytest

from app.application.use_cases.change_requests.payloads import (
    build_create_payload,
    build_update_payload,
    normalize_reason,
    require_id,
)
from app.application.use_cases.change_requests.decision_processor import parse_decision
from app.application.use_cases.tasks.task_queries import parse_status_filter
from app.domain.enums import ChangeRequestStatus, Decision
from app.domain.exceptions import ValidationException
from app.domain.task_rules import TITLE_MAX_LENGTH


class TestCreatePayload:
    def test_defaults(self) -> None:
        """Priority defaults to MEDIUM; optional attributes are present as None."""
        assert build_create_payload(title="  Quarterly audit ") == {
            "title": "Quarterly audit",
            "description": None,
            "priority": "MEDIUM",
            "due_date": None,
            "assigned_to_user_id": None,
        }

    def test_full_attribute_set_is_normalized(self) -> None:
        payload = build_create_payload(
            title="Audit",
            description="  ",
            priority="high",
            due_date="2025-06-30",
            assigned_to_user_id=" u_123 ",
        )
        assert payload == {
            "title": "Audit",
            "description": None,
            "priority": "HIGH",
            "due_date": "2025-06-30",
            "assigned_to_user_id": "u_123",
        }

    def test_date_objects_are_accepted(self) -> None:
        payload = build_create_payload(title="Audit", due_date=date(2025, 1, 2))
        assert payload["due_date"] == "2025-01-02"

    @pytest.mark.parametrize("title", [None, "", "   "])
    def test_title_required(self, title: object) -> None:
        with pytest.raises(ValidationException) as exc_info:
            build_create_payload(title=title)
        assert exc_info.value.details == {"field": "title"}

    def test_title_length_is_bounded(self) -> None:
        assert build_create_payload(title="x" * TITLE_MAX_LENGTH)["title"] == "x" * TITLE_MAX_LENGTH
        with pytest.raises(ValidationException) as exc_info:
            build_create_payload(title="x" * (TITLE_MAX_LENGTH + 1))
        assert exc_info.value.details == {"field": "title"}

    @pytest.mark.parametrize(
        ("kwargs", "field"),
        [
            ({"priority": "URGENT"}, "priority"),
            ({"due_date": "30/06/2025"}, "due_date"),
            ({"due_date": 20250630}, "due_date"),
            ({"assigned_to_user_id": "not an id!"}, "assigned_to_user_id"),
            ({"description": 42}, "description"),
        ],
    )
    def test_out_of_domain_values(self, kwargs: dict, field: str) -> None:
        with pytest.raises(ValidationException) as exc_info:
            build_create_payload(title="Audit", **kwargs)
        assert exc_info.value.details == {"field": field}


class TestUpdatePayload:
    def test_only_sent_keys_are_carried(self) -> None:
        assert build_update_payload({"priority": "low"}) == {"priority": "LOW"}

    def test_null_clears_nullable_fields(self) -> None:
        payload = build_update_payload(
            {"description": None, "due_date": None, "assigned_to_user_id": None}
        )
        assert payload == {"description": None, "due_date": None, "assigned_to_user_id": None}

    def test_status_is_normalized(self) -> None:
        assert build_update_payload({"status": " completed"}) == {"status": "COMPLETED"}

    def test_empty_changes_rejected(self) -> None:
        with pytest.raises(ValidationException, match="At least one field"):
            build_update_payload({})

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            build_update_payload({"title": "x", "organizational_unit_id": "other"})
        assert exc_info.value.message == "Field not editable: organizational_unit_id"

    @pytest.mark.parametrize("field", ["title", "status", "priority"])
    def test_required_fields_cannot_be_cleared(self, field: str) -> None:
        with pytest.raises(ValidationException) as exc_info:
            build_update_payload({field: None})
        assert exc_info.value.details == {"field": field}

    def test_blank_title_rejected(self) -> None:
        with pytest.raises(ValidationException):
            build_update_payload({"title": "   "})

    def test_overlong_title_rejected(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            build_update_payload({"title": "x" * (TITLE_MAX_LENGTH + 1)})
        assert exc_info.value.details == {"field": "title"}


class TestScalars:
    def test_require_id_trims(self) -> None:
        assert require_id("  abc-123 ", "task_id") == "abc-123"

    @pytest.mark.parametrize("raw", [None, "", "a b", "x" * 65, 12])
    def test_require_id_rejects(self, raw: object) -> None:
        with pytest.raises(ValidationException) as exc_info:
            require_id(raw, "task_id")
        assert exc_info.value.details == {"field": "task_id"}

    def test_reason_blank_is_none(self) -> None:
        assert normalize_reason("   ") is None
        assert normalize_reason(" late ") == "late"

    def test_parse_decision(self) -> None:
        assert parse_decision("rejected") is Decision.REJECTED
        with pytest.raises(ValidationException):
            parse_decision("MAYBE")

    def test_status_filter(self) -> None:
        assert parse_status_filter(None) is None
        assert parse_status_filter("  ") is None
        assert parse_status_filter("approved") is ChangeRequestStatus.APPROVED
        with pytest.raises(ValidationException):
            parse_status_filter("DONE")

"""Change request use cases: submission engine and decision processor."""

from app.application.use_cases.change_requests.decision_processor import (
    DecisionProcessor,
    parse_decision,
)
from app.application.use_cases.change_requests.request_operations import (
    AUTO_APPROVAL_COMMENT,
    ChangeRequestService,
)

__all__ = [
    "AUTO_APPROVAL_COMMENT",
    "ChangeRequestService",
    "DecisionProcessor",
    "parse_decision",
]

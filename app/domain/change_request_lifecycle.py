"""Change request lifecycle: the single table of legal status transitions.

PENDING -> APPROVED and PENDING -> REJECTED are the only transitions.
APPROVED and REJECTED are terminal.
"""

from app.domain.enums import ChangeRequestStatus, Decision
from app.domain.exceptions import ChangeRequestConflictException

_TRANSITIONS: dict[tuple[ChangeRequestStatus, Decision], ChangeRequestStatus] = {
    (ChangeRequestStatus.PENDING, Decision.APPROVED): ChangeRequestStatus.APPROVED,
    (ChangeRequestStatus.PENDING, Decision.REJECTED): ChangeRequestStatus.REJECTED,
}


def decide(
    current: ChangeRequestStatus,
    decision: Decision,
    change_request_id: str = "",
) -> ChangeRequestStatus:
    """Return the status reached by applying decision to a request in status current.

    Raises:
        ChangeRequestConflictException: If current is terminal.
    """
    try:
        return _TRANSITIONS[(current, decision)]
    except KeyError:
        raise ChangeRequestConflictException(
            change_request_id, current_status=current.value
        ) from None

"""
Matches app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    MatchesServiceError,
    MatchNotFoundError,
    MatchClosedError,
    InvalidAmountError,
    InvalidTeamSplitError,
    EmptyTeamError,
    DuplicateMemberError,
    UnknownMemberError,
    AlreadyAttendingError,
    AttendanceFullError,
    NotAttendingError,
)

from .cost_allocation import (
    MemberAllocation,
    TeamAllocation,
    AllocatedShare,
    allocate,
    allocate_with_breakdown,
)

from .match_setup import (
    get_match_by_id,
    open_match,
    validate_team_layout,
    create_match,
    delete_match,
    save_last_match_config,
    get_last_match_config,
)

from .attendance import (
    MAX_ATTENDANCE,
    register_attendance,
    cancel_attendance,
    get_attendance,
)


__all__ = [
    # Exceptions
    'MatchesServiceError',
    'MatchNotFoundError',
    'MatchClosedError',
    'InvalidAmountError',
    'InvalidTeamSplitError',
    'EmptyTeamError',
    'DuplicateMemberError',
    'UnknownMemberError',
    'AlreadyAttendingError',
    'AttendanceFullError',
    'NotAttendingError',

    # Cost Allocation
    'MemberAllocation',
    'TeamAllocation',
    'AllocatedShare',
    'allocate',
    'allocate_with_breakdown',

    # Match Setup
    'get_match_by_id',
    'open_match',
    'validate_team_layout',
    'create_match',
    'delete_match',
    'save_last_match_config',
    'get_last_match_config',

    # Attendance
    'MAX_ATTENDANCE',
    'register_attendance',
    'cancel_attendance',
    'get_attendance',
]

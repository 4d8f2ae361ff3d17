"""
Attendance service.

Members sign up for an open match until the list is full.
"""

import logging
from uuid import UUID

from django.db import transaction

from apps.matches.models import Match, MatchStatus, Attendance
from apps.members.models import Member

from .exceptions import (
    MatchNotFoundError,
    MatchClosedError,
    AlreadyAttendingError,
    AttendanceFullError,
    NotAttendingError,
    UnknownMemberError,
)


logger = logging.getLogger(__name__)

MAX_ATTENDANCE = 20


def _lock_open_match(match_id: UUID) -> Match:
    try:
        match = Match.objects.select_for_update().get(id=match_id, is_deleted=False)
    except (Match.DoesNotExist, ValueError):
        raise MatchNotFoundError(f"Match with ID {match_id} not found")

    if match.status != MatchStatus.PENDING:
        raise MatchClosedError("Attendance is closed for this match")
    return match


@transaction.atomic
def register_attendance(*, match_id: UUID, member_id: UUID) -> Attendance:
    """
    Sign a member up for a match.

    Raises:
        MatchNotFoundError: If match doesn't exist
        MatchClosedError: If the match is already published
        UnknownMemberError: If member doesn't exist or is inactive
        AlreadyAttendingError: If member is already on the list
        AttendanceFullError: If MAX_ATTENDANCE members already signed up

    Note:
        The match row is locked so concurrent sign-ups can't exceed the cap.
    """
    match = _lock_open_match(match_id)

    try:
        member = Member.objects.get(id=member_id, is_active=True)
    except (Member.DoesNotExist, ValueError):
        raise UnknownMemberError(f"Member with ID {member_id} not found")

    if Attendance.objects.filter(match=match, member=member).exists():
        raise AlreadyAttendingError(f"{member.get_display_name()} is already attending")

    if Attendance.objects.filter(match=match).count() >= MAX_ATTENDANCE:
        raise AttendanceFullError(f"Attendance is full ({MAX_ATTENDANCE} players)")

    attendance = Attendance.objects.create(match=match, member=member)
    logger.info("Member %s registered for match %s", member.id, match.id)
    return attendance


@transaction.atomic
def cancel_attendance(*, match_id: UUID, member_id: UUID) -> None:
    """
    Remove a member from the attendance list.

    Raises:
        MatchNotFoundError: If match doesn't exist
        MatchClosedError: If the match is already published
        NotAttendingError: If member wasn't on the list
    """
    match = _lock_open_match(match_id)

    deleted, _ = Attendance.objects.filter(match=match, member_id=member_id).delete()
    if not deleted:
        raise NotAttendingError("Member is not on the attendance list")

    logger.info("Member %s left match %s", member_id, match.id)


def get_attendance(*, match_id: UUID):
    """Attendance list of a match in sign-up order."""
    return (
        Attendance.objects
        .filter(match_id=match_id)
        .select_related('member')
        .order_by('created_at')
    )

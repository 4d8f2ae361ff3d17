"""
Notification messages for match events.
"""

from uuid import UUID

from apps.matches.models import Match
from apps.matches.services.exceptions import MatchNotFoundError
from apps.members.models import Member
from apps.members.services.exceptions import MemberNotFoundError

from .push import send_to_all


def _get_match(match_id: UUID) -> Match:
    try:
        return Match.objects.get(id=match_id, is_deleted=False)
    except (Match.DoesNotExist, ValueError):
        raise MatchNotFoundError(f"Match with ID {match_id} not found")


def _get_member(member_id: UUID) -> Member:
    try:
        return Member.objects.get(id=member_id)
    except (Member.DoesNotExist, ValueError):
        raise MemberNotFoundError(f"Member with ID {member_id} not found")


def _format_date(match: Match) -> str:
    return match.date.strftime('%d/%m/%Y')


def notify_new_match(*, match_id: UUID) -> dict:
    """Tell everybody a match was published and shares can be paid."""
    match = _get_match(match_id)
    return send_to_all(
        title="Trận đấu mới!",
        body=f"Trận đấu ngày {_format_date(match)} đã được tạo. Vào thanh toán ngay!",
        data={'matchId': str(match.id), 'url': '/pay'},
    )


def notify_attendance_created(*, match_id: UUID, member_id: UUID) -> dict:
    match = _get_match(match_id)
    member = _get_member(member_id)
    return send_to_all(
        title="Điểm danh",
        body=f"{member.get_display_name()} đã điểm danh trận ngày {_format_date(match)}",
        data={'matchId': str(match.id), 'memberId': str(member.id), 'url': '/attendance'},
    )


def notify_attendance_deleted(*, match_id: UUID, member_id: UUID) -> dict:
    match = _get_match(match_id)
    member = _get_member(member_id)
    return send_to_all(
        title="Hủy điểm danh",
        body=f"{member.get_display_name()} đã hủy điểm danh trận ngày {_format_date(match)}",
        data={'matchId': str(match.id), 'memberId': str(member.id), 'url': '/attendance'},
    )


def notify_manual(*, title: str, body: str) -> dict:
    """Free-form message from the admin."""
    return send_to_all(title=title, body=body)

"""
Service layer unit tests for members app.
"""

import pytest
from uuid import uuid4

from apps.members.models import Member, strip_diacritics
from apps.members.services import (
    get_member_by_id,
    create_member,
    update_member,
    delete_member,
    search_members,
    toggle_payment_exemption,
    toggle_creditor,
    MemberNotFoundError,
    MemberHasSharesError,
)


class TestStripDiacritics:

    def test_removes_vietnamese_marks(self):
        assert strip_diacritics('Nguyễn Văn An') == 'nguyen van an'

    def test_handles_d_with_stroke(self):
        assert strip_diacritics('Đức') == 'duc'
        assert strip_diacritics('đạt') == 'dat'

    def test_none_is_empty(self):
        assert strip_diacritics(None) == ''


@pytest.mark.django_db
class TestMemberManagement:
    """Tests for member_management.py service functions."""

    def test_create_member_strips_whitespace(self):
        member = create_member(name='  Phạm Hùng ', nickname=' Hùng ')

        assert member.name == 'Phạm Hùng'
        assert member.nickname == 'Hùng'
        assert member.is_active is True
        assert member.get_display_name() == 'Hùng'

    def test_get_member_by_id_not_found(self):
        with pytest.raises(MemberNotFoundError):
            get_member_by_id(member_id=uuid4())

    def test_update_member_ignores_unknown_fields(self, member):
        updated = update_member(member_id=member.id, name='An Nguyễn', created_at=None)

        assert updated.name == 'An Nguyễn'
        assert Member.objects.get(id=member.id).created_at is not None

    def test_toggle_exemption_flips_flag(self, member):
        assert toggle_payment_exemption(member_id=member.id).is_exempt_from_payment is True
        assert toggle_payment_exemption(member_id=member.id).is_exempt_from_payment is False

    def test_toggle_creditor_flips_flag(self, member):
        assert toggle_creditor(member_id=member.id).is_creditor is True

    def test_toggle_unknown_member(self):
        with pytest.raises(MemberNotFoundError):
            toggle_creditor(member_id=uuid4())

    def test_delete_member_without_shares(self, member):
        delete_member(member_id=member.id)

        assert not Member.objects.filter(id=member.id).exists()

    def test_delete_member_with_shares_refused(self, member):
        from datetime import date
        from apps.matches.models import Match
        from apps.payments.models import Share

        match = Match.objects.create(date=date(2025, 3, 1), total_amount=100000)
        Share.objects.create(match=match, member=member, team_code='A', amount=100000)

        with pytest.raises(MemberHasSharesError):
            delete_member(member_id=member.id)


@pytest.mark.django_db
class TestSearchMembers:

    def test_search_ignores_diacritics(self, member, other_member):
        results = search_members(query='nguyen')

        assert results == [member]

    def test_search_matches_nickname(self, member, other_member):
        cat = Member.objects.create(name='Hoàng Minh', nickname='Mèo')

        assert search_members(query='meo') == [cat]

    def test_search_with_d_stroke(self, member, other_member):
        assert search_members(query='duc') == [other_member]

    def test_inactive_members_hidden_by_default(self, member, inactive_member):
        assert inactive_member not in search_members()
        assert inactive_member in search_members(include_inactive=True)

    def test_normalized_names_stored(self, member):
        stored = Member.objects.get(id=member.id)

        assert stored.name_normalized == 'nguyen van an'
        assert stored.nickname_normalized == 'an'

    def test_search_follows_rename(self, member, other_member):
        update_member(member_id=member.id, name='Lê Đình Khoa', nickname='')

        assert search_members(query='khoa') == [Member.objects.get(id=member.id)]
        assert search_members(query='nguyen') == []

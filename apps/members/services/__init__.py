"""
Members app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    MembersServiceError,
    MemberNotFoundError,
    MemberHasSharesError,
)

from .member_management import (
    get_member_by_id,
    create_member,
    update_member,
    toggle_payment_exemption,
    toggle_creditor,
    delete_member,
    search_members,
)


__all__ = [
    # Exceptions
    'MembersServiceError',
    'MemberNotFoundError',
    'MemberHasSharesError',

    # Member Management
    'get_member_by_id',
    'create_member',
    'update_member',
    'toggle_payment_exemption',
    'toggle_creditor',
    'delete_member',
    'search_members',
]

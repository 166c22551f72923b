"""
Organization Use Cases

Profile and membership views of the caller's own organization.
"""

from .dtos import MemberInfo, MemberList, OrganizationDetails, UpdateOrganizationCommand
from .get_organization_use_case import GetOrganizationUseCase
from .list_members_use_case import ListMembersUseCase
from .update_organization_use_case import UpdateOrganizationUseCase

__all__ = [
    "GetOrganizationUseCase",
    "UpdateOrganizationUseCase",
    "ListMembersUseCase",
    "UpdateOrganizationCommand",
    "OrganizationDetails",
    "MemberInfo",
    "MemberList",
]

"""
Update Organization Use Case

Edits the caller's own organization profile.
"""

import logging

from src.app.services.unit_of_work import UnitOfWork
from src.domain.tenant_context import TenantContext
from src.libs.result import Error, ErrorKind, Result, Return

from .dtos import OrganizationDetails, UpdateOrganizationCommand
from .get_organization_use_case import organization_not_found

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 100


class UpdateOrganizationUseCase:
    """
    Use case for updating an organization.

    Business Rules:
    - The organization is always the caller's, never one named in the request
    - Only name and settings change; tenant_id is immutable
    - Name, when given, is trimmed and must be 1..100 characters
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, context: TenantContext, command: UpdateOrganizationCommand
    ) -> Result[OrganizationDetails]:
        name = command.name.strip() if command.name is not None else None
        if name is not None and not 0 < len(name) <= MAX_NAME_LENGTH:
            return Return.err(
                Error(
                    "INVALID_ORGANIZATION_NAME",
                    f"Organization name must be between 1 and {MAX_NAME_LENGTH} characters",
                    ErrorKind.validation,
                )
            )

        async with self.uow:
            organization = await self.uow.organizations.update_profile(
                context.organization_id,
                context.tenant_id,
                name=name,
                settings=command.settings,
            )
            if organization is None:
                return Return.err(organization_not_found())

            await self.uow.commit()
            details = OrganizationDetails.from_entity(organization)

        logger.info(f"Organization updated: {details.name} by user {context.user_id}")
        return Return.ok(details)

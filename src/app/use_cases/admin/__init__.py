"""Platform administration use cases (super admin only)."""

from .dtos import PlatformCounts, PlatformStats, TenantList, TenantSummary
from .get_platform_stats_use_case import GetPlatformStatsUseCase
from .list_tenants_use_case import ListTenantsUseCase
from .provision_super_admin_use_case import ProvisionSuperAdminUseCase

__all__ = [
    "GetPlatformStatsUseCase",
    "ListTenantsUseCase",
    "ProvisionSuperAdminUseCase",
    "PlatformCounts",
    "PlatformStats",
    "TenantList",
    "TenantSummary",
]

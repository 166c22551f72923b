"""
Audit Use Cases

All audit-related business logic.
"""

from .get_audit_entries_use_case import AuditEntryInfo, AuditEntryPage, GetAuditEntriesUseCase

__all__ = [
    "GetAuditEntriesUseCase",
    "AuditEntryInfo",
    "AuditEntryPage",
]

"""
Append-only moderation audit trail.
"""

from comichub.kernel.events.audit_log import AuditLog

__all__ = ["AuditLog"]

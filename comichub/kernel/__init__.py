"""
Kernel layer: persistence models, identity, the audit log and notifications.

Invariants:
- Every moderation mutation is audited in the same transaction, before commit
- Audit entries are append-only
- Notifications are best-effort and never undo the mutation they describe
"""

from comichub.kernel.events.audit_log import AuditLog
from comichub.kernel.identity.identity_service import IdentityService
from comichub.kernel.notifications.notification_service import NotificationService

__all__ = [
    "AuditLog",
    "IdentityService",
    "NotificationService",
]

"""
User notifications.
"""

from comichub.kernel.notifications.notification_service import NotificationService

__all__ = ["NotificationService"]

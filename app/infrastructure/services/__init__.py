"""Infrastructure services (adapters for application service ports)."""

from app.infrastructure.services.notification_service import StoreNotificationService

__all__ = ["StoreNotificationService"]

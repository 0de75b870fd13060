from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from app.core import policy
from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.models.notification import Notification, NotificationType
from app.models.user import User
from app.services.base import BaseService


class NotificationService(BaseService):
    def create_notification(
        self,
        user_id: int,
        type: NotificationType,
        message: str,
        related_id: Optional[int] = None
    ) -> Notification:
        """
        Internal utility for creating notifications.
        """
        notification = Notification(
            user_id=user_id,
            type=type,
            message=message,
            related_id=related_id
        )
        self.db.add(notification)
        self._commit()
        self.db.refresh(notification)
        return notification

    def notify(
        self,
        user_id: int,
        type: NotificationType,
        message: str,
        related_id: Optional[int] = None
    ) -> Optional[Notification]:
        """
        Best-effort dispatch after the triggering write has committed.
        Never raises: a failure is logged and the notification is dropped.
        """
        try:
            return self.create_notification(user_id, type, message, related_id)
        except Exception as e:
            self._logger.warning(
                f"Notification failed ({type.value} -> user {user_id}): {e}",
                exc_info=True
            )
            try:
                self.db.rollback()
            except SQLAlchemyError as rollback_error:
                self._logger.error(f"Rollback after notification failure failed: {rollback_error}")
            return None

    def list_for(self, actor: User, unread_only: bool = False, limit: Optional[int] = None) -> List[Notification]:
        query = self.db.query(Notification).filter(Notification.user_id == actor.id)
        if unread_only:
            query = query.filter(Notification.is_read == False)  # noqa: E712
        return (
            query.order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit or settings.notification_list_limit)
            .all()
        )

    def mark_read(self, actor: User, notification_id: int) -> Notification:
        notification = self.db.get(Notification, notification_id)
        if notification is None:
            raise NotFoundError("Notification", notification_id)
        policy.authorize(actor, policy.Action.UPDATE_NOTIFICATION, notification)

        notification.is_read = True
        self._commit()
        self.db.refresh(notification)
        return notification

    def mark_all_read(self, actor: User) -> int:
        """Flip the read flag on the actor's own unread notifications only."""
        result = self.db.execute(
            update(Notification)
            .where(Notification.user_id == actor.id, Notification.is_read == False)  # noqa: E712
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        self._commit()
        return result.rowcount

import logging

from portfolio.models import ActivityLog

logger = logging.getLogger(__name__)

class AuditTrail:
    """Appends activity_log rows on behalf of one actor and source address.

    Writes happen in their own commit after the primary operation; a failed
    write is rolled back and logged, never raised.
    """

    def __init__(self, session, actor_id=None, source_ip=None):
        self.session = session
        self.actor_id = actor_id
        self.source_ip = source_ip

    def record(self, action, details=''):
        try:
            self.session.add(ActivityLog(
                admin_id=self.actor_id,
                action=action,
                details=details,
                ip_address=self.source_ip
            ))
            self.session.commit()
            return True
        except Exception as e:
            logger.error(f'Activity log error ({action}): {e}')
            try:
                self.session.rollback()
            except Exception as rollback_error:
                logger.error(f'Activity log rollback failed: {rollback_error}')
            return False


class NullAuditTrail:
    def record(self, action, details=''):
        return False

"""Best-effort audit trail writer.

The dispatcher calls the audit writers registered for a command once the
command's unit of work has committed. A failure to write the audit entry is
logged and swallowed: the business change has already happened and must not
be reported as failed because of it.
"""

import structlog
from protean.utils.globals import current_domain

from stockroom.audit.audit_log import AuditLog
from stockroom.shared.context import SYSTEM_ACTOR, current_user

logger = structlog.get_logger(__name__)


class AuditRecorder:
    def log(self, user_id, username, action, entity_type, entity_id, entity_name=None, details=None):
        """Append one audit entry; returns it, or None when it could not be written."""
        try:
            entry = AuditLog.create(
                user_id=user_id or SYSTEM_ACTOR,
                username=username or SYSTEM_ACTOR,
                action=action,
                entity_type=entity_type,
                entity_id=str(entity_id),
                entity_name=entity_name,
                details=details,
            )
            current_domain.repository_for(AuditLog).create(entry)
        except Exception:
            logger.warning(
                "Audit entry could not be written",
                action=action,
                entity_type=entity_type,
                entity_id=str(entity_id),
                exc_info=True,
            )
            return None

        logger.debug("Audit entry written", action=action, entity_type=entity_type, entity_id=str(entity_id))
        return entry


audit_recorder = AuditRecorder()


def record(action, entity_type, entity_id, entity_name=None, details=None):
    """Record a change on behalf of the user bound to the current request."""
    user = current_user()
    return audit_recorder.log(
        user.user_id,
        user.username,
        action,
        entity_type,
        entity_id,
        entity_name=entity_name,
        details=details,
    )

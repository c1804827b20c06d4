"""Repository for the AuditLog aggregate."""

from stockroom.audit.audit_log import AuditLog
from stockroom.domain import stockroom
from stockroom.shared.repository import newest_first, scan


@stockroom.repository(part_of=AuditLog)
class AuditLogRepository:
    """Append and read-back only; audit entries are never updated or deleted."""

    def create(self, audit_log):
        self.add(audit_log)
        return audit_log

    def get_recent(self, count):
        return newest_first(scan(self._dao), count)

    def get_for_entity(self, entity_type, entity_id):
        return newest_first(scan(self._dao, entity_type=entity_type, entity_id=str(entity_id)))

"""AuditLog aggregate: one immutable entry per user-attributed change."""

from protean.fields import DateTime, Identifier, String, Text

from stockroom.domain import stockroom
from stockroom.shared.clock import utcnow


@stockroom.aggregate
class AuditLog:
    """Append-only record of a single state change.

    Entries are built through :meth:`create` and never modified or removed
    afterwards.
    """

    user_id: String(required=True, max_length=100)
    username: String(required=True, max_length=150)
    action: String(required=True, max_length=50)
    entity_type: String(required=True, max_length=50)
    entity_id: Identifier(required=True)
    entity_name: String(max_length=255, sanitize=False)
    details: Text(sanitize=False)
    created_at: DateTime(default=utcnow)

    @classmethod
    def create(cls, user_id, username, action, entity_type, entity_id, entity_name=None, details=None):
        return cls(
            user_id=user_id,
            username=username,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            entity_name=entity_name,
            details=details,
            created_at=utcnow(),
        )

"""Per-request context: the acting user and the cancellation signal.

The HTTP layer (or any other caller) binds a :class:`RequestContext` around
each dispatched request. Handlers, repositories and the cache read it back
through :func:`current_user` and :func:`checkpoint` instead of receiving it as
an argument, so the Protean command pipeline does not need to know about it.
"""

import threading
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field

import structlog

from stockroom.shared.exceptions import OperationCancelled

SYSTEM_ACTOR = "system"


@dataclass(frozen=True)
class CurrentUser:
    user_id: str | None = None
    username: str | None = None
    is_authenticated: bool = False

    @classmethod
    def anonymous(cls):
        return cls()


class CancellationToken:
    """Thread-safe flag a caller sets to abandon an in-flight request."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self):
        return self._event.is_set()


@dataclass(frozen=True)
class RequestContext:
    user: CurrentUser = field(default_factory=CurrentUser.anonymous)
    cancellation: CancellationToken | None = None


_request_context: ContextVar[RequestContext | None] = ContextVar("stockroom_request_context", default=None)


@contextmanager
def request_scope(user=None, cancellation=None):
    """Bind the acting user and cancellation token for the duration of a request."""
    context = RequestContext(user=user or CurrentUser.anonymous(), cancellation=cancellation)
    token = _request_context.set(context)
    try:
        with structlog.contextvars.bound_contextvars(user_id=context.user.user_id or SYSTEM_ACTOR):
            yield context
    finally:
        _request_context.reset(token)


def current_context():
    return _request_context.get() or RequestContext()


def current_user():
    return current_context().user


def checkpoint():
    """Abort with :class:`OperationCancelled` if the current request was cancelled."""
    cancellation = current_context().cancellation
    if cancellation is not None and cancellation.cancelled:
        raise OperationCancelled({"_request": ["Request was cancelled"]})

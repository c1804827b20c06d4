"""Request dispatcher: one handler per request type, validators first.

Each request type is registered once with its handler, the validators that
must pass before the handler runs, the audit writer for a successful change
and the cache prefixes a successful run invalidates::

    dispatcher.register(CreateProduct, process_command,
                        validators=[validate_create_product],
                        audit=audit_product_created,
                        invalidates=PRODUCT_WRITE_PREFIXES)
    product = dispatcher.dispatch(CreateProduct(...), user=user)

Audit and invalidation run after the handler has returned, outside the
command's unit of work. The dispatcher never reinterprets a handler's
exception; it only short-circuits when validation fails.
"""

from dataclasses import dataclass

import structlog
from protean.exceptions import ConfigurationError, ValidationError

from stockroom.shared.context import checkpoint, request_scope
from stockroom.shared.validation import merge_violations

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Route:
    handler: object
    validators: tuple = ()
    audit: object = None
    invalidates: tuple = ()


class Dispatcher:
    def __init__(self, cache_provider=None):
        self._routes = {}
        self._cache_provider = cache_provider

    def register(self, request_cls, handler, *, validators=(), audit=None, invalidates=()):
        if request_cls in self._routes:
            raise ConfigurationError(f"A handler is already registered for {request_cls.__name__}")
        self._routes[request_cls] = Route(handler, tuple(validators), audit, tuple(invalidates))

    def route_for(self, request_cls):
        route = self._routes.get(request_cls)
        if route is None:
            raise ConfigurationError(f"No handler registered for {request_cls.__name__}")
        return route

    def validate(self, request):
        """Run every validator for the request and raise once with all violations."""
        route = self.route_for(type(request))
        violations = merge_violations(validator(request) for validator in route.validators)
        if violations:
            logger.info("Request rejected", request=type(request).__name__, fields=sorted(violations))
            raise ValidationError(violations)

    def dispatch(self, request, *, user=None, cancellation=None):
        route = self.route_for(type(request))
        self.validate(request)

        with request_scope(user=user, cancellation=cancellation):
            checkpoint()
            result = route.handler(request)

            if route.audit is not None:
                route.audit(request, result)
            if route.invalidates and self._cache_provider is not None:
                self._cache_provider().invalidate(*route.invalidates)

        return result

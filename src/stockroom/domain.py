"""Domain initialization and configuration."""

from protean.domain import Domain

from stockroom.utils.logging import get_logger

# Logging itself is configured by the entrypoint (see app.py).
logger = get_logger(__name__)

# Domain Composition Root
stockroom = Domain(name="stockroom")

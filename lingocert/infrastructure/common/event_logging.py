"""Domain event handler that writes committed events to the structured log."""

import structlog

from lingocert.domain.common import DomainEvent

logger = structlog.get_logger("lingocert.events")


def log_domain_event(event: DomainEvent) -> None:
    logger.info("domain_event", **event.to_dict())

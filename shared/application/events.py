"""
Domain event dispatching.
"""
import logging
from typing import List

from shared.domain import AggregateRoot, DomainEvent


def dispatch_domain_events(aggregate: AggregateRoot, logger: logging.Logger) -> List[DomainEvent]:
    """Drain the aggregate's pending events and record them in the log."""
    events = aggregate.clear_domain_events()
    for event in events:
        logger.info(f"{event.event_type} {event.payload()}")
    return events

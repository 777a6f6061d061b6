"""
In-process change feed.

The record service publishes one ChangeEvent per committed mutation; live
queries subscribe per entity and hold a Subscription until they cancel it.
"""
import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, DefaultDict, List

from app.core.permissions import Entity, Operation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    entity: Entity
    operation: Operation
    record_id: str


Handler = Callable[[ChangeEvent], None]


class Subscription:
    def __init__(self, feed: "ChangeFeed", entity: Entity, handler: Handler):
        self._feed = feed
        self.entity = entity
        self.handler = handler
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self.active = False
            self._feed._remove(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.cancel()


class ChangeFeed:
    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers: DefaultDict[Entity, List[Subscription]] = defaultdict(list)

    def subscribe(self, entity: Entity, handler: Handler) -> Subscription:
        subscription = Subscription(self, entity, handler)
        with self._lock:
            self._subscribers[entity].append(subscription)
        logger.debug(f"Subscribed to {entity.value} changes")
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        with self._lock:
            subscribers = self._subscribers.get(subscription.entity, [])
            if subscription in subscribers:
                subscribers.remove(subscription)

    def subscriber_count(self, entity: Entity) -> int:
        with self._lock:
            return len(self._subscribers.get(entity, []))

    def publish(self, event: ChangeEvent) -> None:
        with self._lock:
            subscribers = list(self._subscribers.get(event.entity, []))
        for subscription in subscribers:
            if not subscription.active:
                continue
            try:
                subscription.handler(event)
            except Exception:
                # The mutation is already committed; one broken subscriber must not fail it
                logger.exception(
                    "Change subscriber failed",
                    extra={"entity": event.entity.value, "record_id": event.record_id},
                )


change_feed = ChangeFeed()

"""Change notifications for tag and claim mutations.

Services queue a `ChangeEvent` on the session they write with. The events are
published only once that session commits, a rollback drops them. Observers
(dashboards, the SSE stream) must treat an event as a cue to re-fetch: the
payload is not authoritative, delivery may repeat and order is not guaranteed.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Literal

from sqlalchemy import event
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

PENDING_KEY = "tagchip.pending_changes"

Topic = Literal["tags", "claims"]


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    topic: Topic
    action: str  # created | status_changed | claimed | ...
    project_id: int | None = None
    tag_id: int | None = None

    def as_dict(self) -> dict:
        return {
            "topic": self.topic,
            "action": self.action,
            "project_id": self.project_id,
            "tag_id": self.tag_id,
        }


Callback = Callable[[ChangeEvent], None]


@dataclass
class ChangeNotifier:
    _project_tags: dict[int, list[Callback]] = field(default_factory=dict)
    _claims: list[Callback] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def on_project_tags_changed(
        self, project_id: int, callback: Callback
    ) -> Callable[[], None]:
        """Subscribe to tag mutations of one project. Returns an unsubscriber."""
        with self._lock:
            self._project_tags.setdefault(project_id, []).append(callback)

        def unsubscribe() -> None:
            with self._lock:
                callbacks = self._project_tags.get(project_id, [])
                if callback in callbacks:
                    callbacks.remove(callback)
                if not callbacks:
                    self._project_tags.pop(project_id, None)

        return unsubscribe

    def on_claims_changed(self, callback: Callback) -> Callable[[], None]:
        """Subscribe to every claim, regardless of project."""
        with self._lock:
            self._claims.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._claims:
                    self._claims.remove(callback)

        return unsubscribe

    def _targets(self, change: ChangeEvent) -> list[Callback]:
        with self._lock:
            if change.topic == "claims":
                return list(self._claims)
            if change.project_id is None:
                return []
            return list(self._project_tags.get(change.project_id, []))

    def publish(self, change: ChangeEvent) -> int:
        """Deliver to matching subscribers, returns how many were called."""
        targets = self._targets(change)
        logger.debug("Publishing %s to %d subscriber(s)", change, len(targets))
        for callback in targets:
            try:
                callback(change)
            except Exception:
                # one broken observer must not starve the others
                logger.exception("Change subscriber %r failed on %s", callback, change)
        return len(targets)


_notifier = ChangeNotifier()


def get_notifier() -> ChangeNotifier:
    return _notifier


def queue_change(session, change: ChangeEvent) -> None:
    """Publish `change` after `session` commits. Accepts a Session or UnitOfWork."""
    session.info.setdefault(PENDING_KEY, []).append(change)


@event.listens_for(Session, "after_commit")
def _publish_pending(session: Session) -> None:
    pending = session.info.pop(PENDING_KEY, [])
    notifier = get_notifier()
    for change in pending:
        notifier.publish(change)


@event.listens_for(Session, "after_soft_rollback")
def _drop_pending(session: Session, previous_transaction) -> None:
    dropped = session.info.pop(PENDING_KEY, [])
    if dropped:
        logger.debug("Dropped %d change(s) after rollback", len(dropped))

"""Subscription repository (file persistence with version compare-and-swap)."""
import logging
from pathlib import Path
from typing import List, Optional

from catering.domain.Subscription import Subscription
from catering.domain.errors import ConcurrentModificationError, NotFoundError, PersistenceError
from catering.infra.json_store import JsonListStore
from catering.infra.paths import SUBSCRIPTIONS_FILENAME, data_file

logger = logging.getLogger(__name__)


class SubscriptionRepository:
    def __init__(self, path: Optional[Path] = None):
        self.store = JsonListStore(path or data_file(SUBSCRIPTIONS_FILENAME))

    def _load(self) -> List[Subscription]:
        rows = self.store.load()
        try:
            return [Subscription.from_dict(r) for r in rows]
        except (TypeError, ValueError) as e:
            logger.error("Malformed subscription record in %s: %s", self.store.path, e)
            raise PersistenceError() from e

    def add(self, subscription: Subscription) -> Subscription:
        with self.store.lock:
            rows = self.store.load()
            subscription.id = JsonListStore.next_id(rows)
            subscription.version = 1
            rows.append(subscription.to_dict())
            self.store.save(rows)
        logger.info("Subscription %s created for owner %s", subscription.id, subscription.owner_id)
        return subscription

    def get(self, subscription_id: int) -> Subscription:
        for sub in self._load():
            if sub.id == subscription_id:
                return sub
        raise NotFoundError("Subscription", subscription_id)

    def list_all(self) -> List[Subscription]:
        subs = self._load()
        subs.sort(key=lambda s: (s.created_at is not None, s.created_at), reverse=True)
        return subs

    def list_by_owner(self, owner_id: str) -> List[Subscription]:
        return [s for s in self.list_all() if s.owner_id == owner_id]

    def save(self, subscription: Subscription, expected_version: int) -> Subscription:
        """Persist a changed subscription only if nobody else saved it since it was read."""
        with self.store.lock:
            rows = self.store.load()
            for i, row in enumerate(rows):
                if row.get('id') != subscription.id:
                    continue
                current_version = int(row.get('version') or 1)
                if current_version != expected_version:
                    logger.warning("Version conflict on subscription %s: expected %s, found %s",
                                   subscription.id, expected_version, current_version)
                    raise ConcurrentModificationError(subscription.id)
                subscription.version = current_version + 1
                rows[i] = subscription.to_dict()
                self.store.save(rows)
                return subscription
        raise NotFoundError("Subscription", subscription.id)

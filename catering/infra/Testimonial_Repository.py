"""Testimonial repository (file persistence)."""
import logging
from pathlib import Path
from typing import List, Optional

from catering.domain.Testimonial import Testimonial
from catering.domain.errors import NotFoundError, PersistenceError
from catering.infra.json_store import JsonListStore
from catering.infra.paths import TESTIMONIALS_FILENAME, data_file

logger = logging.getLogger(__name__)


class TestimonialRepository:
    __test__ = False  # not a pytest test class

    def __init__(self, path: Optional[Path] = None):
        self.store = JsonListStore(path or data_file(TESTIMONIALS_FILENAME))

    def list_all(self) -> List[Testimonial]:
        try:
            items = [Testimonial.from_dict(r) for r in self.store.load()]
        except (TypeError, ValueError) as e:
            logger.error("Malformed testimonial record in %s: %s", self.store.path, e)
            raise PersistenceError() from e
        items.sort(key=lambda t: (t.created_at is not None, t.created_at), reverse=True)
        return items

    def add(self, testimonial: Testimonial) -> Testimonial:
        with self.store.lock:
            rows = self.store.load()
            testimonial.id = JsonListStore.next_id(rows)
            rows.append(testimonial.to_dict())
            self.store.save(rows)
        return testimonial

    def set_approved(self, testimonial_id: int, approved: bool = True) -> Testimonial:
        with self.store.lock:
            rows = self.store.load()
            for row in rows:
                if row.get('id') == testimonial_id:
                    row['approved'] = approved
                    self.store.save(rows)
                    return Testimonial.from_dict(row)
        raise NotFoundError("Testimonial", testimonial_id)

import logging
from typing import List, Optional

from sqlalchemy.engine import Engine

from urbannest.models import Property
from urbannest.sql import property_select, property_table

LOG = logging.getLogger("repo")

class PropertyRepository:
    """
    Read access to the property table.
    One pooled connection per call; the engine is shared across requests.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def _fetch_all(self, stmt) -> List[Property]:
        with self.engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [Property.model_validate(dict(r)) for r in rows]

    def find_all(self) -> List[Property]:
        items = self._fetch_all(property_select())
        LOG.debug("find_all -> %s rows", len(items))
        return items

    def find_by_id(self, property_id: int) -> Optional[Property]:
        """
        Returns the property with this id, or None if there is none.
        """
        stmt = property_select().where(property_table.c.id == property_id)
        with self.engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        LOG.debug("find_by_id(%s) -> %s", property_id, "hit" if row else "miss")
        return Property.model_validate(dict(row)) if row else None

    def find_by_location_containing_ignore_case(self, term: str) -> List[Property]:
        # %, _ in the term match literally
        stmt = property_select().where(property_table.c.location.icontains(term, autoescape=True))
        items = self._fetch_all(stmt)
        LOG.debug("location ~* %r -> %s rows", term, len(items))
        return items

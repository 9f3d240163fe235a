import logging
from typing import List, Optional

from urbannest.models import Property
from urbannest.repository.properties import PropertyRepository

LOG = logging.getLogger("service")

class PropertyService:
    """Business rules between the HTTP layer and the repository."""

    def __init__(self, repository: PropertyRepository):
        self.repository = repository

    def get_all_properties(self) -> List[Property]:
        return self.repository.find_all()

    def get_property_by_id(self, property_id: Optional[int]) -> Optional[Property]:
        # no id, no lookup
        if property_id is None:
            LOG.debug("get_property_by_id called without an id")
            return None
        return self.repository.find_by_id(property_id)

    def search_properties(self, location: Optional[str]) -> List[Property]:
        """
        Blank/missing term -> every property.
        Otherwise the raw (untrimmed) term is matched as a case-insensitive substring.
        """
        if location is None or not location.strip():
            LOG.debug("blank search term, returning all properties")
            return self.get_all_properties()
        return self.repository.find_by_location_containing_ignore_case(location)

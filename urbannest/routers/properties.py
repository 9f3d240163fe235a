# urbannest/routers/properties.py
from typing import List, Optional
from fastapi import APIRouter, Path, Query, Response

from urbannest.models import Property
from urbannest.service.properties import PropertyService

def build_router(service: PropertyService) -> APIRouter:
    """
    Thin endpoints bound to an explicitly constructed service:
      - parse path/query params (FastAPI does the int coercion)
      - call the service
      - None -> 404 with an empty body
    """
    router = APIRouter(prefix="/api/properties", tags=["properties"])

    def list_properties() -> List[Property]:
        return service.get_all_properties()

    def search_properties(
        location: Optional[str] = Query(None, description="Case-insensitive substring of the location"),
    ) -> List[Property]:
        return service.search_properties(location)

    def get_property(
        property_id: int = Path(..., ge=-(2**63), le=2**63 - 1, description="64-bit property id"),
    ):
        found = service.get_property_by_id(property_id)
        if found is None:
            return Response(status_code=404)
        return found

    # (method, path, handler, response model); /search must precede /{property_id}
    routes = [
        ("GET", "",                 list_properties,   List[Property]),
        ("GET", "/search",          search_properties, List[Property]),
        ("GET", "/{property_id}",   get_property,      Property),
    ]
    for method, path, handler, model in routes:
        router.add_api_route(
            path,
            handler,
            methods=[method],
            response_model=model,
            name=handler.__name__,
        )

    return router

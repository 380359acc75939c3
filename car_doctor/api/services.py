"""
Service catalog API endpoints.

The catalog is maintained outside this API; both endpoints are read-only
and need no session.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from car_doctor.core.deps import get_service_dao
from car_doctor.core.exceptions import ResourceNotFoundError
from car_doctor.dao.service import ServiceDAO
from car_doctor.schemas.service import ServiceSummary


router = APIRouter(tags=["services"])


@router.get(
    "/services",
    response_model=List[Dict[str, Any]],
    status_code=status.HTTP_200_OK,
    summary="List services",
    description="Return every service in the catalog",
)
async def list_services(
    dao: ServiceDAO = Depends(get_service_dao),
) -> List[Dict[str, Any]]:
    """
    Return the full catalog in database iteration order.

    Raises:
        DatabaseError (500): If the catalog cannot be read
    """
    return await dao.list_services()


@router.get(
    "/service/{id}",
    response_model=None,
    responses={status.HTTP_200_OK: {"model": ServiceSummary}},
    status_code=status.HTTP_200_OK,
    summary="Get service",
    description="Return the title and price of one service",
)
async def get_service(
    id: str,
    dao: ServiceDAO = Depends(get_service_dao),
) -> Dict[str, Any]:
    """
    Look up a single service by its ObjectId.

    Args:
        id: 24-hex service identifier
        dao: Service DAO

    Returns:
        Stored title and price, unchanged (absent fields stay absent)

    Raises:
        MalformedIdentifierError (500): If id is not a valid ObjectId
        ResourceNotFoundError (404): If no service has this id
        DatabaseError (500): If the lookup fails
    """
    summary = await dao.get_summary(id)
    if summary is None:
        raise ResourceNotFoundError(message="Services not found", service_id=id)
    return summary

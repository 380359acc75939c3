"""
Checkout API endpoints.

Security:
- Listing requires a session cookie whose uid matches the path uid
- Submission is open; the body is stored as submitted
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from car_doctor.core.deps import get_checkout_dao, require_owner
from car_doctor.dao.checkout import CheckoutDAO
from car_doctor.schemas.checkout import CheckoutCreate, CheckoutCreatedResponse


router = APIRouter(tags=["checkouts"])


@router.post(
    "/checkout",
    response_model=CheckoutCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit checkout",
    description="Store a checkout submission",
)
async def create_checkout(
    checkout: CheckoutCreate,
    dao: CheckoutDAO = Depends(get_checkout_dao),
) -> CheckoutCreatedResponse:
    """
    Persist a checkout.

    Every call creates a new document; resubmitting the same body stores a
    second copy.

    Args:
        checkout: Submitted checkout (uid plus any other fields)
        dao: Checkout DAO

    Returns:
        Acknowledgement with the new checkout id

    Raises:
        DatabaseError (500): If the insert fails
    """
    checkout_id = await dao.create(checkout.model_dump())
    return CheckoutCreatedResponse(id=checkout_id)


@router.get(
    "/checkouts/{uid}",
    response_model=List[Dict[str, Any]],
    status_code=status.HTTP_200_OK,
    summary="List checkouts",
    description="Return every checkout owned by the signed-in user",
)
async def list_checkouts(
    uid: str,
    identity: Dict[str, Any] = Depends(require_owner),
    dao: CheckoutDAO = Depends(get_checkout_dao),
) -> List[Dict[str, Any]]:
    """
    List a user's checkouts.

    Args:
        uid: Owner identifier (must match the session uid)
        identity: Verified session payload
        dao: Checkout DAO

    Returns:
        Checkouts in database order

    Raises:
        AuthenticationError (401): Missing or invalid session
        AuthorizationError (403): Session belongs to another user
        DatabaseError (500): If the query fails
    """
    return await dao.list_for_user(uid)

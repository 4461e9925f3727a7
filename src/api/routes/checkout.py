"""Checkout API routes for Stripe integration."""

from fastapi import APIRouter, status

from src.api.deps import CheckoutServiceDep, CurrentActor
from src.schemas.order import CheckoutSession, CheckoutSessionCreate, CheckoutSessionResponse

router = APIRouter(prefix="/checkout", tags=["checkout"])


@router.post(
    "/create-session",
    response_model=CheckoutSessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Create Stripe Checkout Session",
    description="Prices the cart from the restaurant's menu, creates a pending order and a Stripe Checkout Session.",
)
async def create_checkout_session(
    data: CheckoutSessionCreate,
    actor: CurrentActor,
    service: CheckoutServiceDep,
) -> CheckoutSessionResponse:
    """Create a Stripe Checkout Session for the actor's cart.

    The frontend should redirect to the returned session URL.

    Args:
        data: Restaurant, cart lines and delivery details.
        actor: The authenticated actor placing the order.
        service: Checkout service.

    Returns:
        CheckoutSessionResponse: Contains the session id and redirect URL.
    """
    session = await service.create_checkout_session(actor, data)
    return CheckoutSessionResponse(session=CheckoutSession(**session))

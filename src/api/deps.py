"""FastAPI dependency injection functions."""

from typing import Annotated

from fastapi import Depends, Header, Request
from supabase import Client

from src.api.middleware.auth import AuthError, AuthErrorCode, decode_jwt
from src.api.middleware.error_handler import AuthenticationError
from src.core.config import Settings, get_settings
from src.core.stripe import PaymentGateway
from src.schemas.auth import Actor
from src.services.checkout_service import CheckoutService
from src.services.email_service import EmailService
from src.services.order_service import OrderService
from src.services.restaurant_service import RestaurantService


# Service handles created in the application lifespan


def get_supabase(request: Request) -> Client:
    """Get the Supabase client created at startup."""
    return request.app.state.supabase


def get_payment_gateway(request: Request) -> PaymentGateway:
    """Get the payment gateway created at startup."""
    return request.app.state.payment_gateway


def get_email_service(request: Request) -> EmailService:
    """Get the email service created at startup."""
    return request.app.state.email_service


SupabaseDep = Annotated[Client, Depends(get_supabase)]
PaymentGatewayDep = Annotated[PaymentGateway, Depends(get_payment_gateway)]
EmailServiceDep = Annotated[EmailService, Depends(get_email_service)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_restaurant_service(client: SupabaseDep) -> RestaurantService:
    """Build a RestaurantService for the current request."""
    return RestaurantService(client)


RestaurantServiceDep = Annotated[RestaurantService, Depends(get_restaurant_service)]


def get_order_service(client: SupabaseDep, restaurants: RestaurantServiceDep) -> OrderService:
    """Build an OrderService for the current request."""
    return OrderService(client, restaurants)


OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]


def get_checkout_service(
    orders: OrderServiceDep,
    restaurants: RestaurantServiceDep,
    gateway: PaymentGatewayDep,
    email: EmailServiceDep,
    settings: SettingsDep,
) -> CheckoutService:
    """Build a CheckoutService for the current request."""
    return CheckoutService(orders, restaurants, gateway, email, settings)


CheckoutServiceDep = Annotated[CheckoutService, Depends(get_checkout_service)]


# Authentication


def get_token(request: Request, authorization: str | None) -> str | None:
    """Extract the JWT from the Authorization header or the auth cookie.

    Checks the Bearer header first, then falls back to the cookie set by
    the login flow.

    Args:
        request: FastAPI request object.
        authorization: Authorization header value, if any.

    Returns:
        str | None: The raw token or None if not present.

    Raises:
        AuthenticationError: If an Authorization header is present but malformed.
    """
    if authorization:
        parts = authorization.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise AuthenticationError("Invalid authorization header format. Expected: Bearer <token>")
        return parts[1]

    return request.cookies.get(get_settings().auth_cookie_name)


async def get_current_actor(
    request: Request,
    authorization: Annotated[str | None, Header(description="Bearer token")] = None,
) -> Actor:
    """Resolve the authenticated actor for this request.

    Use this for every endpoint that requires authentication. The returned
    Actor is passed explicitly into service calls.

    Args:
        request: FastAPI request object (for the auth cookie).
        authorization: The Authorization header value (Bearer token).

    Returns:
        Actor: The authenticated actor.

    Raises:
        AuthenticationError: 401 if token is missing, invalid, or expired.
    """
    token = get_token(request, authorization)
    if not token:
        raise AuthenticationError("User not authenticated")

    try:
        payload = decode_jwt(token)
        return payload.to_actor()

    except AuthError as e:
        if e.code == AuthErrorCode.TOKEN_EXPIRED:
            raise AuthenticationError("Session expired, please log in again") from e

        raise AuthenticationError(e.message) from e

    except ValueError as e:
        # Subject claim is not a UUID
        raise AuthenticationError("Invalid authentication token") from e


CurrentActor = Annotated[Actor, Depends(get_current_actor)]

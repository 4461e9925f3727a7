"""Order API routes."""

from uuid import UUID

from fastapi import APIRouter, Query

from src.api.deps import CurrentActor, OrderServiceDep
from src.schemas.order import (
    OrderDetailResponse,
    OrderListResponse,
    OrderResponse,
    OrderStatusUpdate,
    OrderStatusUpdateResponse,
)

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get(
    "",
    response_model=OrderListResponse,
    summary="List my orders",
    description="Returns the authenticated user's orders, newest first. Admins may pass all=true to list every order.",
)
async def list_orders(
    actor: CurrentActor,
    service: OrderServiceDep,
    all_orders: bool = Query(default=False, alias="all", description="Admin only: list every order"),
) -> OrderListResponse:
    """List orders for the current actor.

    Args:
        actor: The authenticated actor.
        service: Order service.
        all_orders: If true and the actor is an admin, list every order.

    Returns:
        OrderListResponse: List of orders.
    """
    if all_orders and actor.is_admin:
        orders = await service.get_all_orders(actor)
    else:
        orders = await service.get_orders_for_user(actor.user_id)

    return OrderListResponse(orders=[OrderResponse(**order) for order in orders])


@router.get(
    "/all",
    response_model=OrderListResponse,
    summary="List all orders",
    description="Returns every order in the system, newest first. Admin only.",
)
async def list_all_orders(actor: CurrentActor, service: OrderServiceDep) -> OrderListResponse:
    """List every order.

    Args:
        actor: The authenticated actor; must be an admin.
        service: Order service.

    Returns:
        OrderListResponse: List of orders.

    Raises:
        AuthorizationError: 403 if the actor is not an admin.
    """
    orders = await service.get_all_orders(actor)
    return OrderListResponse(orders=[OrderResponse(**order) for order in orders])


@router.get(
    "/restaurant",
    response_model=OrderListResponse,
    summary="List orders for my restaurants",
    description="Returns orders placed against restaurants the authenticated user owns, newest first.",
)
async def list_restaurant_orders(actor: CurrentActor, service: OrderServiceDep) -> OrderListResponse:
    """List orders for restaurants owned by the actor."""
    orders = await service.get_orders_for_restaurant_owner(actor)
    return OrderListResponse(orders=[OrderResponse(**order) for order in orders])


@router.get(
    "/{order_id}",
    response_model=OrderDetailResponse,
    summary="Get order by ID",
    description="Returns a single order. Only accessible by the order owner or an admin.",
)
async def get_order(order_id: UUID, actor: CurrentActor, service: OrderServiceDep) -> OrderDetailResponse:
    """Get a single order by ID.

    Args:
        order_id: The order's UUID.
        actor: The authenticated actor.
        service: Order service.

    Returns:
        OrderDetailResponse: The order data.

    Raises:
        NotFoundError: 404 if order not found.
        AuthorizationError: 403 if not authorized to view this order.
    """
    order = await service.get_order_for_actor(order_id, actor)
    return OrderDetailResponse(order=OrderResponse(**order))


@router.put(
    "/{order_id}/status",
    response_model=OrderStatusUpdateResponse,
    summary="Update order status",
    description="Sets an order's status. Only the restaurant owner or an admin may do this.",
)
async def update_order_status(
    order_id: UUID,
    data: OrderStatusUpdate,
    actor: CurrentActor,
    service: OrderServiceDep,
) -> OrderStatusUpdateResponse:
    """Update an order's status.

    Args:
        order_id: The order's UUID.
        data: The desired status.
        actor: The authenticated actor.
        service: Order service.

    Returns:
        OrderStatusUpdateResponse: The updated order.

    Raises:
        ValidationError: 400 if the status is missing or unknown.
        NotFoundError: 404 if the order or its restaurant is not found.
        AuthorizationError: 403 if the actor may not update this order.
    """
    order = await service.update_order_status(order_id, data.status, actor)
    return OrderStatusUpdateResponse(
        message="Order status updated successfully",
        order=OrderResponse(**order),
    )

"""Checkout and order Pydantic schemas for API request/response models."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field


class CartItemRequest(BaseModel):
    """A cart line as submitted by the client.

    Only menu_id and quantity are used. Name, image and price are accepted
    for compatibility with the web client but the checkout re-reads them
    from the restaurant's menu.
    """

    model_config = ConfigDict(from_attributes=True)

    menu_id: str = Field(
        validation_alias=AliasChoices("menu_id", "menuId"),
        description="Menu item ID",
    )
    name: str | None = Field(default=None, description="Display name (ignored)")
    image: str | None = Field(default=None, description="Display image (ignored)")
    price: Decimal | None = Field(default=None, description="Client-side price (ignored)")
    quantity: int = Field(ge=1, description="Quantity ordered")


class DeliveryDetailsSchema(BaseModel):
    """Delivery address for an order."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(description="Recipient name")
    email: EmailStr = Field(description="Recipient email, also used for the receipt")
    address: str = Field(description="Street address")
    city: str = Field(description="City")
    country: str = Field(default="", description="Country")
    contact: str | None = Field(default=None, description="Contact phone number")


class CheckoutSessionCreate(BaseModel):
    """Schema for creating a checkout session via POST /checkout/create-session."""

    model_config = ConfigDict(from_attributes=True)

    restaurant_id: UUID | None = Field(
        default=None,
        validation_alias=AliasChoices("restaurant_id", "restaurantId"),
        description="Restaurant the cart belongs to",
    )
    cart_items: list[CartItemRequest] = Field(
        default_factory=list,
        validation_alias=AliasChoices("cart_items", "cartItems"),
        description="Cart lines",
    )
    delivery_details: DeliveryDetailsSchema = Field(
        validation_alias=AliasChoices("delivery_details", "deliveryDetails"),
        description="Delivery address",
    )


class CheckoutSession(BaseModel):
    """Hosted checkout session handed back to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Stripe Checkout Session ID")
    url: str = Field(description="Stripe Checkout URL to redirect to")


class CheckoutSessionResponse(BaseModel):
    """Schema for checkout session creation response."""

    model_config = ConfigDict(from_attributes=True)

    success: bool = Field(default=True, description="Request outcome")
    session: CheckoutSession = Field(description="Created checkout session")


class OrderCartItemSchema(BaseModel):
    """Schema for a single cart line stored on an order."""

    model_config = ConfigDict(from_attributes=True)

    menu_id: str = Field(description="Menu item ID")
    name: str = Field(description="Menu item name at checkout time")
    image: str = Field(default="", description="Menu item image at checkout time")
    price: Decimal = Field(description="Unit price at checkout time, in major currency units")
    quantity: int = Field(ge=1, description="Quantity ordered")


class RestaurantSummary(BaseModel):
    """Restaurant fields shown alongside an order."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(description="Restaurant unique identifier")
    restaurant_name: str = Field(description="Restaurant display name")
    image_url: str | None = Field(default=None, description="Restaurant image")
    city: str | None = Field(default=None, description="City")
    country: str | None = Field(default=None, description="Country")


class OrderResponse(BaseModel):
    """Schema for order API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(description="Order unique identifier")
    user_id: UUID = Field(description="Owning user")
    restaurant_id: UUID = Field(description="Restaurant the order was placed with")
    delivery_details: DeliveryDetailsSchema = Field(description="Delivery address")
    cart_items: list[OrderCartItemSchema] = Field(description="Order lines")
    total_amount: int = Field(description="Paid amount in the smallest currency unit, 0 until payment")
    status: str = Field(description="Order status")
    stripe_checkout_session_id: str | None = Field(default=None, description="Stripe Checkout Session ID")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")
    restaurant: RestaurantSummary | None = Field(
        default=None,
        description="Restaurant summary, None if the restaurant no longer exists",
    )


class OrderListResponse(BaseModel):
    """Schema for order list API responses."""

    model_config = ConfigDict(from_attributes=True)

    success: bool = Field(default=True, description="Request outcome")
    orders: list[OrderResponse] = Field(description="Orders, newest first")


class OrderDetailResponse(BaseModel):
    """Schema for single order API responses."""

    model_config = ConfigDict(from_attributes=True)

    success: bool = Field(default=True, description="Request outcome")
    order: OrderResponse = Field(description="The order")


class OrderStatusUpdate(BaseModel):
    """Schema for PUT /orders/{order_id}/status.

    The status is a plain string so unknown values reach the service and
    are rejected with a descriptive validation error.
    """

    model_config = ConfigDict(from_attributes=True)

    status: str | None = Field(default=None, description="Desired order status")


class OrderStatusUpdateResponse(BaseModel):
    """Schema for order status update responses."""

    model_config = ConfigDict(from_attributes=True)

    success: bool = Field(default=True, description="Request outcome")
    message: str = Field(description="Human-readable result")
    order: OrderResponse = Field(description="The updated order")

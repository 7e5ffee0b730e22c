"""Order routes: placement and read-back.

Handlers are plain ``def`` functions: FastAPI runs them in its threadpool,
so each request gets its own blocking unit of work.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from stockroom.application.dto import OrderDTO, OrderItemRequest, PlacedOrderDTO
from stockroom.application.place_order import PlaceOrderHandler
from stockroom.application.show_order import ShowOrderHandler
from stockroom.domain.exceptions import NotFoundError
from stockroom.infrastructure.api.dependencies import get_place_order, get_show_order
from stockroom.infrastructure.api.error_handlers import error_response
from stockroom.infrastructure.api.schemas import OrderCreate, OrderCreated, OrderOut

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post(
    "",
    response_model=OrderCreated,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid order, unknown product or not enough stock"}},
)
def place_order(
    body: OrderCreate,
    handler: PlaceOrderHandler = Depends(get_place_order),
) -> PlacedOrderDTO | Response:
    requests = [
        OrderItemRequest(product_id=item.product_id, quantity=item.quantity)
        for item in body.items
    ]
    try:
        return handler.handle(requests)
    except NotFoundError as exc:
        # An unknown product is a bad order, not a missing resource.
        return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


@router.get("/{order_id}", response_model=OrderOut, responses={404: {"description": "Unknown order"}})
def get_order(
    order_id: str,
    handler: ShowOrderHandler = Depends(get_show_order),
) -> OrderDTO:
    return handler.handle(order_id)

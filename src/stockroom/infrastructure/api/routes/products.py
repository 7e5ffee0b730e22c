"""Product catalog routes (CRUD)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from stockroom.application.add_product import AddProductHandler
from stockroom.application.dto import ProductDTO
from stockroom.application.remove_product import RemoveProductHandler
from stockroom.application.show_product import ShowProductHandler
from stockroom.application.update_product import UpdateProductHandler
from stockroom.infrastructure.api.dependencies import (
    get_add_product,
    get_remove_product,
    get_show_product,
    get_update_product,
)
from stockroom.infrastructure.api.schemas import ProductCreate, ProductOut, ProductUpdate

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[ProductOut])
def list_products(
    handler: ShowProductHandler = Depends(get_show_product),
) -> list[ProductDTO]:
    return handler.list_all()


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreate,
    handler: AddProductHandler = Depends(get_add_product),
) -> ProductDTO:
    return handler.handle(
        name=body.name,
        unit_price=body.unit_price,
        stock=body.stock,
        description=body.description,
    )


@router.get("/{product_id}", response_model=ProductOut)
def get_product(
    product_id: int,
    handler: ShowProductHandler = Depends(get_show_product),
) -> ProductDTO:
    return handler.handle(product_id)


@router.put("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    body: ProductUpdate,
    handler: UpdateProductHandler = Depends(get_update_product),
) -> ProductDTO:
    return handler.handle(
        product_id,
        name=body.name,
        description=body.description,
        unit_price=body.unit_price,
        stock=body.stock,
    )


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    handler: RemoveProductHandler = Depends(get_remove_product),
) -> Response:
    handler.handle(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

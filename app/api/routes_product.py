from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.product import CRUDProduct
from app.db.core import get_db_session
from app.schemas.product import Product, ProductRequest, ProductResponse
from app.services.product_service import ProductService

router = APIRouter(prefix="/items", tags=["products"])


def get_product_service(db_session: AsyncSession = Depends(get_db_session)) -> ProductService:
    return ProductService(CRUDProduct(db_session))


@router.get("", response_model=List[ProductResponse])
async def list_products(service: ProductService = Depends(get_product_service)):
    """Get all products ordered by id."""
    return await service.get_all_products()


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, service: ProductService = Depends(get_product_service)):
    return await service.get_product_by_id(product_id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(request: ProductRequest, service: ProductService = Depends(get_product_service)):
    return await service.create_product(Product(**request.model_dump()))


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: int, request: ProductRequest,
                         service: ProductService = Depends(get_product_service)):
    return await service.update_product(product_id, Product(**request.model_dump()))


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    await service.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

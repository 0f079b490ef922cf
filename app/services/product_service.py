import logging
from typing import List

from app.core.exceptions import ProductNotFoundError, ProductValidationError
from app.crud.product import CRUDProduct
from app.schemas.product import Product

logger = logging.getLogger(__name__)


class ProductService:
    """
    Product use cases on top of a storage adapter.

    Update and delete read the row first and then write it, without a
    surrounding transaction, so concurrent writers resolve as last write wins.
    """

    def __init__(self, crud: CRUDProduct):
        self.crud = crud

    async def get_all_products(self) -> List[Product]:
        return await self.crud.fetch_all()

    async def get_product_by_id(self, product_id: int) -> Product:
        product = await self.crud.fetch_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def create_product(self, product: Product) -> Product:
        if product.id is not None:
            raise ProductValidationError("A new product must not carry an id")
        created = await self.crud.insert(product)
        logger.info(f"Created product {created.id}")
        return created

    async def update_product(self, product_id: int, product_details: Product) -> Product:
        product = await self.get_product_by_id(product_id)
        # all four fields are overwritten, null included; the id on product_details is ignored
        product = product.model_copy(update=product_details.mutable_fields())
        updated = await self.crud.update_by_id(product_id, product)
        if updated is None:
            # deleted between the read and the write
            raise ProductNotFoundError(product_id)
        logger.info(f"Updated product {product_id}")
        return updated

    async def delete_product(self, product_id: int) -> None:
        await self.get_product_by_id(product_id)
        if not await self.crud.delete_by_id(product_id):
            raise ProductNotFoundError(product_id)
        logger.info(f"Deleted product {product_id}")

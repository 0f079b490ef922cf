import logging
import math
from typing import List, Optional
from sqlalchemy import delete, select, update
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ProductValidationError, StorageError
from app.models.product import DESCRIPTION_MAX_LENGTH, PRODUCT_NAME_MAX_LENGTH, ProductRecord
from app.schemas.product import Product

logger = logging.getLogger(__name__)

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


def check_columns(product: Product) -> None:
    """Raise ProductValidationError when a value would break a column constraint of ``products``."""
    if product.product_name is None or not product.product_name.strip():
        raise ProductValidationError("productName is required")
    if len(product.product_name) > PRODUCT_NAME_MAX_LENGTH:
        raise ProductValidationError(
            f"productName must be at most {PRODUCT_NAME_MAX_LENGTH} characters")
    if product.price is None:
        raise ProductValidationError("price is required")
    if not math.isfinite(product.price):
        raise ProductValidationError("price must be a finite number")
    if product.quantity is None:
        raise ProductValidationError("quantity is required")
    if not INT32_MIN <= product.quantity <= INT32_MAX:
        raise ProductValidationError("quantity is out of range")
    if product.description is not None and len(product.description) > DESCRIPTION_MAX_LENGTH:
        raise ProductValidationError(
            f"description must be at most {DESCRIPTION_MAX_LENGTH} characters")


def to_product(record: ProductRecord) -> Product:
    return Product.model_validate(record)


class CRUDProduct:
    """Row operations on the products table, bound to one session."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def fetch_all(self) -> List[Product]:
        try:
            result = await self.db_session.execute(
                select(ProductRecord)
                .order_by(ProductRecord.id)
                .execution_options(populate_existing=True)
            )
            return [to_product(record) for record in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Failed to list products: {e}", exc_info=True)
            raise StorageError("Failed to list products") from e

    async def fetch_by_id(self, product_id: int) -> Optional[Product]:
        try:
            result = await self.db_session.execute(
                select(ProductRecord)
                .where(ProductRecord.id == product_id)
                .execution_options(populate_existing=True)
            )
            record = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to get product {product_id}: {e}", exc_info=True)
            raise StorageError("Failed to get product") from e
        if record is None:
            return None
        return to_product(record)

    async def insert(self, product: Product) -> Product:
        check_columns(product)
        record = ProductRecord(**product.mutable_fields())
        try:
            self.db_session.add(record)
            await self.db_session.commit()
            await self.db_session.refresh(record)
        except (IntegrityError, DataError) as e:
            await self.db_session.rollback()
            logger.error(f"Rejected product insert: {e}", exc_info=True)
            raise ProductValidationError("Product violates a column constraint") from e
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(f"Failed to create product: {e}", exc_info=True)
            raise StorageError("Failed to create product") from e
        return to_product(record)

    async def update_by_id(self, product_id: int, product: Product) -> Optional[Product]:
        """Overwrite all mutable columns of the row. Returns None when no row has ``product_id``."""
        check_columns(product)
        try:
            result = await self.db_session.execute(
                update(ProductRecord)
                .where(ProductRecord.id == product_id)
                .values(**product.mutable_fields())
            )
            await self.db_session.commit()
        except (IntegrityError, DataError) as e:
            await self.db_session.rollback()
            logger.error(f"Rejected update of product {product_id}: {e}", exc_info=True)
            raise ProductValidationError("Product violates a column constraint") from e
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(f"Failed to update product {product_id}: {e}", exc_info=True)
            raise StorageError("Failed to update product") from e
        if result.rowcount == 0:
            return None
        return product.model_copy(update={"id": product_id})

    async def delete_by_id(self, product_id: int) -> bool:
        try:
            result = await self.db_session.execute(delete(ProductRecord).where(ProductRecord.id == product_id))
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(f"Failed to delete product {product_id}: {e}", exc_info=True)
            raise StorageError("Failed to delete product") from e
        return result.rowcount == 1

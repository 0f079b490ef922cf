import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import ProductValidationError, StorageError
from app.crud.product import CRUDProduct, check_columns
from app.schemas.product import Product


async def test_fetch_all_empty_table(crud):
    assert await crud.fetch_all() == []


async def test_insert_assigns_id(crud):
    created = await crud.insert(Product.new("Widget", 9.99, 3, "small"))
    assert created.id is not None
    fetched = await crud.fetch_by_id(created.id)
    assert fetched.model_dump() == created.model_dump()


async def test_fetch_all_is_ordered_by_id(crud):
    ids = [(await crud.insert(Product.new(name, 1.0, 1))).id for name in ["C", "A", "B"]]
    products = await crud.fetch_all()
    assert [product.id for product in products] == sorted(ids)
    assert [product.product_name for product in products] == ["C", "A", "B"]


async def test_fetch_by_id_missing_returns_none(crud):
    assert await crud.fetch_by_id(999999) is None


async def test_update_by_id_overwrites_columns(crud):
    created = await crud.insert(Product.new("Old", 1.0, 1, "a"))
    updated = await crud.update_by_id(created.id, Product.new("New", 2.5, 7, None))
    assert updated.id == created.id
    stored = await crud.fetch_by_id(created.id)
    assert stored.mutable_fields() == {
        "product_name": "New", "price": 2.5, "quantity": 7, "description": None}


async def test_update_by_id_missing_row_returns_none(crud):
    assert await crud.update_by_id(999999, Product.new("X", 1.0, 1, "y")) is None
    assert await crud.fetch_all() == []


async def test_delete_by_id(crud):
    created = await crud.insert(Product.new("Gone", 1.0, 1))
    assert await crud.delete_by_id(created.id) is True
    assert await crud.fetch_by_id(created.id) is None
    assert await crud.delete_by_id(created.id) is False


@pytest.mark.parametrize("product", [
    Product(price=1.0, quantity=1),
    Product(product_name="   ", price=1.0, quantity=1),
    Product(product_name="x" * 256, price=1.0, quantity=1),
    Product(product_name="A", quantity=1),
    Product(product_name="A", price=1.0),
    Product(product_name="A", price=1.0, quantity=2 ** 31),
    Product(product_name="A", price=1.0, quantity=1, description="d" * 501),
])
def test_check_columns_rejects(product):
    with pytest.raises(ProductValidationError):
        check_columns(product)


def test_check_columns_accepts_negative_price_and_full_description():
    check_columns(Product(product_name="A", price=-1.0, quantity=0, description="d" * 500))


async def test_rejected_insert_leaves_table_unchanged(crud):
    with pytest.raises(ProductValidationError):
        await crud.insert(Product.new("A", 1.0, 1, "d" * 501))
    assert await crud.fetch_all() == []


class BrokenSession:
    def __init__(self):
        self.rolled_back = False

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection lost"))

    def add(self, record):
        pass

    async def commit(self):
        raise OperationalError("COMMIT", {}, Exception("connection lost"))

    async def rollback(self):
        self.rolled_back = True


async def test_driver_failure_becomes_storage_error():
    session = BrokenSession()
    broken = CRUDProduct(session)
    with pytest.raises(StorageError):
        await broken.fetch_all()
    with pytest.raises(StorageError):
        await broken.fetch_by_id(1)
    with pytest.raises(StorageError):
        await broken.delete_by_id(1)
    assert session.rolled_back


async def test_failed_insert_rolls_back():
    session = BrokenSession()
    with pytest.raises(StorageError):
        await CRUDProduct(session).insert(Product.new("A", 1.0, 1))
    assert session.rolled_back


async def test_failed_update_rolls_back():
    session = BrokenSession()
    with pytest.raises(StorageError):
        await CRUDProduct(session).update_by_id(1, Product.new("A", 1.0, 1))
    assert session.rolled_back


async def test_non_finite_price_is_rejected(crud):
    for price in (float("inf"), float("-inf"), float("nan")):
        with pytest.raises(ProductValidationError):
            await crud.insert(Product.new("A", price, 1))
    assert await crud.fetch_all() == []


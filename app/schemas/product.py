from typing import Any, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ProductBase(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )

    product_name: Optional[str] = None
    price: Optional[float] = None
    quantity: Optional[int] = None
    description: Optional[str] = None


class ProductRequest(ProductBase):
    """Body of create and update calls. Absent fields are stored as null and an id in the body is ignored."""


class Product(ProductBase):
    """
    In-memory product value.

    ``id`` is None until the product has been inserted. Two persisted
    products are equal when their ids match; otherwise all fields are compared.
    """
    id: Optional[int] = None

    @classmethod
    def new(cls, product_name: str, price: float, quantity: int, description: Optional[str] = None) -> "Product":
        return cls(product_name=product_name, price=price, quantity=quantity, description=description)

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def mutable_fields(self) -> dict:
        return self.model_dump(exclude={"id"})

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        if self.is_persisted and other.is_persisted:
            return self.id == other.id
        return self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        if self.is_persisted:
            return hash(("product", self.id))
        return hash(tuple(self.model_dump().items()))


class ProductResponse(Product):
    id: int

from .product import ProductRecord as ProductRecord

__all__ = ["ProductRecord"]

from typing import Optional
from sqlalchemy import BigInteger, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base

PRODUCT_NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 500


class ProductRecord(Base):
    __tablename__ = "products"

    # SQLite only auto-increments INTEGER primary keys
    id: Mapped[int] = mapped_column(BigInteger().with_variant(Integer, "sqlite"),
                                    primary_key=True, autoincrement=True)
    product_name: Mapped[str] = mapped_column(String(PRODUCT_NAME_MAX_LENGTH), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(DESCRIPTION_MAX_LENGTH), nullable=True)

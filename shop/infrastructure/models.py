"""SQLAlchemy models for database tables.

Provides the categories, products and admins tables. Products keep a
plain ``category_id`` column with no foreign key: categories may be
deleted while still referenced, and the reference is resolved by an
explicit lookup when a product is read.
"""

from decimal import Decimal

from sqlalchemy import Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from shop.infrastructure.database import Base


class CategoryModel(Base):
    """Category row."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        """String representation."""
        return f"<CategoryModel(id={self.id}, name={self.name})>"


class ProductModel(Base):
    """Product row.

    Attributes:
        id: Autoincrement identifier.
        name: Product name.
        description: Free text, at most 1000 characters.
        price: Unit price with two decimal places.
        quantity: Units in stock.
        category_id: Id of the owning category (not enforced by the database).
        image_path: Public path of the associated image.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    category_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    image_path: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductModel(id={self.id}, name={self.name[:30]})>"


class AdminModel(Base):
    """Administrator account row. The password is stored as plaintext."""

    __tablename__ = "admins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)

"""Catalog entities.

Plain data transfer structures for categories and products. Products
reference their category by an explicit ``category_id``; the resolved
``Category`` is attached by the store that fetched the product.
"""

from dataclasses import dataclass, field, fields, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Self

from shop.domain.exceptions import ValidationError

NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000


@dataclass(frozen=True)
class Category:
    """A named grouping of products.

    Attributes:
        id: Store-assigned identifier.
        name: Display name.
    """

    id: int
    name: str


def clean_name(name: str | None, field_name: str = "name") -> str:
    """Strip a display name and check it is non-empty and bounded.

    Raises:
        ValidationError: If the name is blank or too long.
    """
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError(field_name, "must not be empty")
    if len(cleaned) > NAME_MAX_LENGTH:
        raise ValidationError(field_name, f"must be at most {NAME_MAX_LENGTH} characters")
    return cleaned


@dataclass(frozen=True)
class ProductDraft:
    """Writable fields of a product.

    Used for both creation and full replacement on update. Field
    invariants are checked on construction.

    Attributes:
        name: Product name (non-empty).
        price: Unit price (non-negative).
        quantity: Units in stock (non-negative).
        category_id: Id of the owning category.
        description: Optional free text, at most 1000 characters.
        image_path: Public path of the associated image, if any.
    """

    name: str
    price: Decimal
    quantity: int
    category_id: int
    description: str | None = None
    image_path: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", clean_name(self.name))

        if self.description is not None and len(self.description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                "description", f"must be at most {DESCRIPTION_MAX_LENGTH} characters"
            )

        try:
            price = Decimal(str(self.price))
        except (InvalidOperation, ValueError):
            raise ValidationError("price", f"not a decimal amount: {self.price!r}") from None
        if not price.is_finite() or price < 0:
            raise ValidationError("price", "must be a non-negative amount")
        object.__setattr__(self, "price", price)

        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValidationError("quantity", "must be an integer")
        if self.quantity < 0:
            raise ValidationError("quantity", "must not be negative")

        if self.category_id is None:
            raise ValidationError("category_id", "is required")

    @classmethod
    def from_product(cls, product: "Product") -> Self:
        """Build a draft holding the current values of a product."""
        return cls(
            name=product.name,
            price=product.price,
            quantity=product.quantity,
            category_id=product.category_id,
            description=product.description,
            image_path=product.image_path,
        )

    def merged(self, changes: dict[str, Any]) -> Self:
        """Return a new draft with ``changes`` applied.

        Keys that are not draft fields (such as ``id``) are ignored.
        """
        allowed = {f.name for f in fields(self)}
        return replace(self, **{k: v for k, v in changes.items() if k in allowed})


@dataclass(frozen=True)
class Product:
    """A sellable catalog item.

    Attributes:
        id: Store-assigned identifier.
        name: Product name.
        price: Unit price.
        quantity: Units in stock.
        category_id: Id of the owning category.
        category: Resolved category, or None if it no longer exists.
        description: Optional free text.
        image_path: Public path of the associated image, if any.
    """

    id: int
    name: str
    price: Decimal
    quantity: int
    category_id: int
    category: Category | None = None
    description: str | None = None
    image_path: str | None = None

    @property
    def has_dangling_category(self) -> bool:
        """True when the referenced category has been deleted."""
        return self.category is None

    @classmethod
    def from_draft(
        cls,
        product_id: int,
        draft: ProductDraft,
        category: Category | None,
    ) -> Self:
        """Build a stored product from a draft and its resolved category."""
        return cls(
            id=product_id,
            name=draft.name,
            price=draft.price,
            quantity=draft.quantity,
            category_id=draft.category_id,
            category=category,
            description=draft.description,
            image_path=draft.image_path,
        )


@dataclass(frozen=True)
class AdminAccount:
    """Stored administrator account.

    The password is kept and compared as plaintext.
    """

    username: str
    password: str = field(repr=False)

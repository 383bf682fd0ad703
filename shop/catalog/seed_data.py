"""Reference catalog inserted on first startup."""

from decimal import Decimal
from typing import NamedTuple


class SeedProduct(NamedTuple):
    """Seed product keyed by its category name."""

    name: str
    description: str
    price: Decimal
    quantity: int
    category: str


CATEGORIES = [
    "Electronics",
    "Clothing",
    "Books",
    "Home & Garden",
    "Sports",
]

PRODUCTS = [
    SeedProduct(
        "Samsung Galaxy Smartphone",
        "Modern smartphone with an excellent camera and performance",
        Decimal("29999.00"),
        15,
        "Electronics",
    ),
    SeedProduct(
        "ASUS Laptop",
        "Powerful laptop for work and gaming",
        Decimal("59999.00"),
        8,
        "Electronics",
    ),
    SeedProduct(
        "Sony Headphones",
        "Wireless headphones with noise cancellation",
        Decimal("8999.00"),
        25,
        "Electronics",
    ),
    SeedProduct(
        "Cotton T-Shirt",
        "Comfortable 100% cotton t-shirt",
        Decimal("1999.00"),
        50,
        "Clothing",
    ),
    SeedProduct(
        "Classic Jeans",
        "Classic blue jeans",
        Decimal("3999.00"),
        30,
        "Clothing",
    ),
    SeedProduct(
        "Nike Sneakers",
        "Running sneakers",
        Decimal("5999.00"),
        20,
        "Clothing",
    ),
    SeedProduct(
        "War and Peace",
        "Leo Tolstoy's classic novel",
        Decimal("899.00"),
        40,
        "Books",
    ),
    SeedProduct(
        "Harry Potter",
        "Complete Harry Potter book collection",
        Decimal("2999.00"),
        15,
        "Books",
    ),
    SeedProduct(
        "Corner Sofa",
        "Comfortable corner sofa for the living room",
        Decimal("29999.00"),
        5,
        "Home & Garden",
    ),
    SeedProduct(
        "Coffee Machine",
        "Automatic coffee machine with milk frother",
        Decimal("19999.00"),
        10,
        "Home & Garden",
    ),
    SeedProduct(
        "Mountain Bike",
        "Mountain bike for outdoor activities",
        Decimal("24999.00"),
        7,
        "Sports",
    ),
    SeedProduct(
        "Dumbbell Set",
        "Adjustable dumbbell set 2x20kg",
        Decimal("4999.00"),
        12,
        "Sports",
    ),
]
